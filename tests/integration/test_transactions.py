"""Integration tests for the Transactions API."""

import uuid
from decimal import Decimal

import pytest

from avatax_client import AvaTaxAPIError, TransactionBuilder
from avatax_client.models import (
    ChangeTransactionCodeModel,
    CommitTransactionModel,
    DocumentStatus,
    TransactionModel,
    VerifyTransactionModel,
    VoidTransactionModel,
)

pytestmark = pytest.mark.integration


def _invoice(company_code: str, code: str) -> TransactionBuilder:
    return (
        TransactionBuilder(company_code)
        .sales_invoice()
        .code(code)
        .customer("INTEGRATION")
        .ship_from("2000 Main Street", city="Irvine", region="CA", postal_code="92614")
        .ship_to("1100 2nd Ave", city="Seattle", region="WA", postal_code="98101")
        .line(100, item_code="Y0001", tax_code="P0000000")
    )


class TestTransactionsAPI:
    """Integration tests for TransactionsAPI."""

    async def test_estimate_is_not_recorded(self, async_integration_client, company_code) -> None:
        """A SalesOrder should come back with tax but is not stored."""
        client = async_integration_client
        model = (
            TransactionBuilder(company_code)
            .customer("INTEGRATION")
            .single_location("100 Ravine Lane NE", city="Bainbridge Island", region="WA")
            .line(100)
            .build()
        )

        data = await client.transactions.create_transaction(model)

        tx = TransactionModel.model_validate(data)
        assert tx.total_amount == Decimal("100")
        assert tx.total_tax is not None

    async def test_invoice_lifecycle(self, async_integration_client, company_code) -> None:
        """Create, fetch, audit, verify, rename, commit and void an invoice."""
        client = async_integration_client
        code = f"IT-{uuid.uuid4().hex[:12]}"

        created = TransactionModel.model_validate(
            await client.transactions.create_transaction(_invoice(company_code, code).build())
        )
        assert created.code == code
        assert created.status == DocumentStatus.SAVED

        fetched = await client.transactions.get_transaction_by_code(
            company_code, code, {"$include": "Lines"}
        )
        assert fetched["id"] == created.id
        assert len(fetched["lines"]) == 1

        by_id = await client.transactions.get_transaction_by_id(created.id)
        assert by_id["code"] == code

        audit = await client.transactions.audit_transaction(company_code, code)
        assert audit.get("original") is not None

        await client.transactions.verify_transaction(
            company_code,
            code,
            VerifyTransactionModel(
                verify_transaction_date=created.transaction_date,
                verify_total_amount=created.total_amount,
                verify_total_tax=created.total_tax,
            ),
        )

        new_code = f"{code}-R"
        renamed = await client.transactions.change_transaction_code(
            company_code, code, ChangeTransactionCodeModel(new_code=new_code)
        )
        assert renamed["code"] == new_code

        committed = await client.transactions.commit_transaction(
            company_code, new_code, CommitTransactionModel(commit=True)
        )
        assert committed["status"] == DocumentStatus.COMMITTED

        voided = await client.transactions.void_transaction(
            company_code, new_code, VoidTransactionModel()
        )
        assert voided["status"] == DocumentStatus.CANCELLED

    async def test_list_transactions(self, async_integration_client, company_code) -> None:
        """Listing should return a page in the standard result envelope."""
        client = async_integration_client

        page = await client.transactions.list_transactions_by_company(
            company_code, {"$top": 5}
        )

        assert "value" in page
        assert len(page["value"]) <= 5

    async def test_iterate_transactions(self, async_integration_client, company_code) -> None:
        """The iterator should honour the limit."""
        client = async_integration_client

        rows = [
            row
            async for row in client.transactions.iter_transactions_by_company(
                company_code, page_size=2, limit=3
            )
        ]

        assert len(rows) <= 3

    async def test_unknown_transaction(self, async_integration_client, company_code) -> None:
        """A missing transaction should raise with the service's error code."""
        client = async_integration_client

        with pytest.raises(AvaTaxAPIError) as exc_info:
            await client.transactions.get_transaction_by_code(
                company_code, f"MISSING-{uuid.uuid4().hex}"
            )

        assert exc_info.value.status_code == 404
        assert exc_info.value.error_code is not None
