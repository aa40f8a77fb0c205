"""Transactions commands."""

import json
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

import typer

from avatax_client.api.types import TransactionQueryOptions
from avatax_client.cli.async_runner import async_command
from avatax_client.cli.client_factory import get_client
from avatax_client.cli.config import CLIConfig, OutputFormat
from avatax_client.cli.formatters import (
    format_output,
    print_success,
    print_transaction,
    transaction_row,
)
from avatax_client.models.transactions import (
    AuditTransactionModel,
    BulkLockTransactionModel,
    BulkLockTransactionResult,
    ChangeTransactionCodeModel,
    CommitTransactionModel,
    DocumentType,
    LockTransactionModel,
    TransactionModel,
    VerifyTransactionModel,
    VoidReasonCode,
    VoidTransactionModel,
)

app = typer.Typer(no_args_is_help=True)

_OUTPUT_OPTION = typer.Option(
    OutputFormat.TABLE,
    "--output",
    "-o",
    help="Output format.",
)
_INCLUDE_OPTION = typer.Option(
    None,
    "--include",
    "-i",
    help="Nested data to include, e.g. Lines,Details,Summary,Addresses.",
)
_BODY_OPTION = typer.Option(
    ...,
    "--body",
    "-b",
    help="JSON file with the request body ('-' for stdin).",
)


def _read_body(source: str) -> dict[str, Any]:
    """Load a JSON request body from a file or stdin."""
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text()
    except OSError as e:
        msg = f"Cannot read request body: {e}"
        raise ValueError(msg) from e
    body = json.loads(text)
    if not isinstance(body, dict):
        msg = f"Request body in {source} must be a JSON object"
        raise ValueError(msg)
    return body


def _include(include: str | None) -> dict[str, Any] | None:
    return {"$include": include} if include else None


@app.command("get")
@async_command
async def get_transaction(
    ctx: typer.Context,
    company_code: str = typer.Argument(..., help="Company code."),
    transaction_code: str = typer.Argument(..., help="Transaction code."),
    document_type: DocumentType | None = typer.Option(
        None,
        "--type",
        "-t",
        help="Document type (default: SalesInvoice).",
    ),
    include: str | None = _INCLUDE_OPTION,
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Get the current transaction with this code."""
    config: CLIConfig = ctx.obj

    async with get_client(config) as client:
        if document_type is None:
            data = await client.transactions.get_transaction_by_code(
                company_code, transaction_code, _include(include)
            )
        else:
            data = await client.transactions.get_transaction_by_code_and_type(
                company_code, transaction_code, document_type, _include(include)
            )

    print_transaction(data, output, title="Transaction")


@app.command("get-by-id")
@async_command
async def get_transaction_by_id(
    ctx: typer.Context,
    transaction_id: int = typer.Argument(..., help="Unique transaction ID."),
    include: str | None = _INCLUDE_OPTION,
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Get a transaction revision by its ID."""
    config: CLIConfig = ctx.obj

    async with get_client(config) as client:
        data = await client.transactions.get_transaction_by_id(transaction_id, _include(include))

    print_transaction(data, output, title="Transaction")


@app.command("list")
@async_command
async def list_transactions(
    ctx: typer.Context,
    company_code: str = typer.Argument(..., help="Company code."),
    filter_: str | None = typer.Option(
        None,
        "--filter",
        "-f",
        help="Filter statement, e.g. \"date gt '2024-01-01'\" (default: last 30 days).",
    ),
    order_by: str | None = typer.Option(
        None,
        "--order-by",
        help="Sort statements, e.g. 'date DESC'.",
    ),
    include: str | None = _INCLUDE_OPTION,
    limit: int = typer.Option(
        50,
        "--limit",
        "-n",
        help="Maximum transactions to return.",
    ),
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """List transactions recorded by a company."""
    config: CLIConfig = ctx.obj

    options: TransactionQueryOptions = {}
    if filter_:
        options["$filter"] = filter_
    if order_by:
        options["$orderBy"] = order_by
    if include:
        options["$include"] = include

    rows = []
    async with get_client(config) as client:
        async for row in client.transactions.iter_transactions_by_company(
            company_code,
            options,
            page_size=min(limit, 1000),
            limit=limit,
        ):
            rows.append(row)

    if output == OutputFormat.JSON:
        format_output(rows, output)
        return

    format_output(
        [transaction_row(TransactionModel.model_validate(row)) for row in rows],
        output,
        title="Transactions",
    )


@app.command("audit")
@async_command
async def audit_transaction(
    ctx: typer.Context,
    company_code: str = typer.Argument(..., help="Company code."),
    transaction_code: str = typer.Argument(..., help="Transaction code."),
    document_type: DocumentType | None = typer.Option(
        None,
        "--type",
        "-t",
        help="Document type of the original transaction.",
    ),
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Show audit information for a transaction."""
    config: CLIConfig = ctx.obj

    async with get_client(config) as client:
        if document_type is None:
            data = await client.transactions.audit_transaction(company_code, transaction_code)
        else:
            data = await client.transactions.audit_transaction_with_type(
                company_code, transaction_code, document_type
            )

    if output == OutputFormat.JSON:
        format_output(data, output)
        return

    audit = AuditTransactionModel.model_validate(data)
    format_output(
        [
            {
                "company_id": audit.company_id or "",
                "server_timestamp": audit.server_timestamp or "",
                "server_duration": audit.server_duration or "",
                "api_call_status": audit.api_call_status or "",
            }
        ],
        output,
        title="Audit",
    )


@app.command("create")
@async_command
async def create_transaction(
    ctx: typer.Context,
    body: str = _BODY_OPTION,
    include: str | None = _INCLUDE_OPTION,
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Create a transaction from a JSON request body."""
    config: CLIConfig = ctx.obj
    model = _read_body(body)

    async with get_client(config) as client:
        data = await client.transactions.create_transaction(model, _include(include))

    print_transaction(data, output, title="Created")


@app.command("create-or-adjust")
@async_command
async def create_or_adjust_transaction(
    ctx: typer.Context,
    body: str = _BODY_OPTION,
    include: str | None = _INCLUDE_OPTION,
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Create a transaction, or adjust the existing one with the same code."""
    config: CLIConfig = ctx.obj
    model = _read_body(body)

    async with get_client(config) as client:
        data = await client.transactions.create_or_adjust_transaction(model, _include(include))

    print_transaction(data, output, title="Transaction")


@app.command("adjust")
@async_command
async def adjust_transaction(
    ctx: typer.Context,
    company_code: str = typer.Argument(..., help="Company code."),
    transaction_code: str = typer.Argument(..., help="Transaction code."),
    body: str = _BODY_OPTION,
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Adjust a committed transaction."""
    config: CLIConfig = ctx.obj
    model = _read_body(body)

    async with get_client(config) as client:
        data = await client.transactions.adjust_transaction(company_code, transaction_code, model)

    print_transaction(data, output, title="Adjusted")


@app.command("refund")
@async_command
async def refund_transaction(
    ctx: typer.Context,
    company_code: str = typer.Argument(..., help="Company code of the original sale."),
    transaction_code: str = typer.Argument(..., help="Transaction code of the original sale."),
    body: str = _BODY_OPTION,
    include: str | None = _INCLUDE_OPTION,
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Refund a previous sale."""
    config: CLIConfig = ctx.obj
    model = _read_body(body)

    async with get_client(config) as client:
        data = await client.transactions.refund_transaction(
            company_code, transaction_code, model, _include(include)
        )

    print_transaction(data, output, title="Refund")


@app.command("add-lines")
@async_command
async def add_lines(
    ctx: typer.Context,
    body: str = _BODY_OPTION,
    include: str | None = _INCLUDE_OPTION,
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Add lines to an unlocked transaction."""
    config: CLIConfig = ctx.obj
    model = _read_body(body)

    async with get_client(config) as client:
        data = await client.transactions.add_lines(model, _include(include))

    print_transaction(data, output, title="Transaction")


@app.command("delete-lines")
@async_command
async def delete_lines(
    ctx: typer.Context,
    body: str = _BODY_OPTION,
    include: str | None = _INCLUDE_OPTION,
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Remove lines from an unlocked transaction."""
    config: CLIConfig = ctx.obj
    model = _read_body(body)

    async with get_client(config) as client:
        data = await client.transactions.delete_lines(model, _include(include))

    print_transaction(data, output, title="Transaction")


@app.command("commit")
@async_command
async def commit_transaction(
    ctx: typer.Context,
    company_code: str = typer.Argument(..., help="Company code."),
    transaction_code: str = typer.Argument(..., help="Transaction code."),
    uncommit: bool = typer.Option(
        False,
        "--uncommit",
        help="Return a committed transaction to uncommitted.",
    ),
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Commit a transaction for reporting."""
    config: CLIConfig = ctx.obj

    async with get_client(config) as client:
        data = await client.transactions.commit_transaction(
            company_code, transaction_code, CommitTransactionModel(commit=not uncommit)
        )

    print_transaction(data, output, title="Committed" if not uncommit else "Uncommitted")


@app.command("void")
@async_command
async def void_transaction(
    ctx: typer.Context,
    company_code: str = typer.Argument(..., help="Company code."),
    transaction_code: str = typer.Argument(..., help="Transaction code."),
    reason: VoidReasonCode = typer.Option(
        VoidReasonCode.DOC_VOIDED,
        "--reason",
        "-r",
        help="Void reason code.",
    ),
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Void a transaction."""
    config: CLIConfig = ctx.obj

    async with get_client(config) as client:
        data = await client.transactions.void_transaction(
            company_code, transaction_code, VoidTransactionModel(code=reason)
        )

    print_transaction(data, output, title="Voided")


@app.command("lock")
@async_command
async def lock_transaction(
    ctx: typer.Context,
    company_code: str = typer.Argument(..., help="Company code."),
    transaction_code: str = typer.Argument(..., help="Transaction code."),
    unlock: bool = typer.Option(False, "--unlock", help="Unlock instead of lock."),
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Lock a single transaction (sandbox testing)."""
    config: CLIConfig = ctx.obj

    async with get_client(config) as client:
        data = await client.transactions.lock_transaction(
            company_code, transaction_code, LockTransactionModel(is_locked=not unlock)
        )

    print_transaction(data, output, title="Locked" if not unlock else "Unlocked")


@app.command("bulk-lock")
@async_command
async def bulk_lock_transaction(
    ctx: typer.Context,
    document_ids: list[int] = typer.Argument(..., help="Document IDs to lock."),
    unlock: bool = typer.Option(False, "--unlock", help="Unlock instead of lock."),
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Lock several transactions by document ID."""
    config: CLIConfig = ctx.obj

    async with get_client(config) as client:
        data = await client.transactions.bulk_lock_transaction(
            BulkLockTransactionModel(document_ids=document_ids, is_locked=not unlock)
        )

    if output == OutputFormat.JSON:
        format_output(data, output)
        return

    result = BulkLockTransactionResult.model_validate(data)
    print_success(f"{result.number_of_records or 0} document(s) updated")


@app.command("change-code")
@async_command
async def change_transaction_code(
    ctx: typer.Context,
    company_code: str = typer.Argument(..., help="Company code."),
    transaction_code: str = typer.Argument(..., help="Current transaction code."),
    new_code: str = typer.Argument(..., help="New transaction code."),
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Rename a saved or posted transaction."""
    config: CLIConfig = ctx.obj

    async with get_client(config) as client:
        data = await client.transactions.change_transaction_code(
            company_code, transaction_code, ChangeTransactionCodeModel(new_code=new_code)
        )

    print_transaction(data, output, title="Renamed")


@app.command("settle")
@async_command
async def settle_transaction(
    ctx: typer.Context,
    company_code: str = typer.Argument(..., help="Company code."),
    transaction_code: str = typer.Argument(..., help="Transaction code."),
    body: str = _BODY_OPTION,
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Verify, change code and/or commit in one call."""
    config: CLIConfig = ctx.obj
    model = _read_body(body)

    async with get_client(config) as client:
        data = await client.transactions.settle_transaction(company_code, transaction_code, model)

    print_transaction(data, output, title="Settled")


@app.command("verify")
@async_command
async def verify_transaction(
    ctx: typer.Context,
    company_code: str = typer.Argument(..., help="Company code."),
    transaction_code: str = typer.Argument(..., help="Transaction code."),
    expected_date: str | None = typer.Option(
        None,
        "--date",
        help="Expected transaction date (YYYY-MM-DD).",
    ),
    total_amount: float | None = typer.Option(None, "--total-amount", help="Expected total amount."),
    total_tax: float | None = typer.Option(None, "--total-tax", help="Expected total tax."),
    output: OutputFormat = _OUTPUT_OPTION,
) -> None:
    """Check a transaction against expected values."""
    config: CLIConfig = ctx.obj

    model = VerifyTransactionModel(
        verify_transaction_date=date.fromisoformat(expected_date) if expected_date else None,
        verify_total_amount=Decimal(str(total_amount)) if total_amount is not None else None,
        verify_total_tax=Decimal(str(total_tax)) if total_tax is not None else None,
    )

    async with get_client(config) as client:
        data = await client.transactions.verify_transaction(company_code, transaction_code, model)

    print_transaction(data, output, title="Verified")
