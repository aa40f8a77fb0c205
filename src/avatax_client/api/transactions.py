"""Transactions API endpoints.

A transaction represents a unique potentially taxable action that a company
has recorded: sales, purchases, inventory transfers and returns (refunds).
Status transitions (commit, lock, void, adjust) are enforced by the service;
these methods only address the right endpoint and pass data through.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

from avatax_client.api.base import BaseAPI

if TYPE_CHECKING:
    from avatax_client.api.types import DocumentTypeParam, QueryOptions, RequestBody

MAX_PAGE_SIZE = 1000


class TransactionsAPI(BaseAPI):
    """AvaTax Transactions API.

    Every method maps to exactly one REST endpoint and returns the parsed
    response body unchanged. Path parameters are inserted as given.

    Methods taking ``options`` forward it untouched as the query string; see
    ``TransactionQueryOptions`` for the recognized keys.
    """

    async def add_lines(
        self,
        model: RequestBody,
        options: QueryOptions | None = None,
    ) -> dict[str, Any]:
        """Add lines to an existing unlocked transaction.

        Lines without a line number get a generated one; set ``renumber``
        on the model to have the service renumber all lines "1", "2", ...

        Args:
            model: Transaction identity and the lines to add
                (``AddTransactionLineModel``)
            options: Query options, e.g. ``{"$include": "Lines"}``

        Returns:
            The updated transaction
        """
        path = "/api/v2/companies/transactions/lines/add"
        return await self._post(path, model, options)

    async def adjust_transaction(
        self,
        company_code: str,
        transaction_code: str,
        model: RequestBody,
    ) -> dict[str, Any]:
        """Correct a previously created transaction.

        The original is marked ``Adjusted`` and both revisions stay
        retrievable. Transactions already reported to a tax authority are
        locked and cannot be adjusted.

        Args:
            company_code: Company that recorded the transaction
            transaction_code: The transaction code to adjust
            model: The adjustment (``AdjustTransactionModel``)
        """
        path = f"/api/v2/companies/{company_code}/transactions/{transaction_code}/adjust"
        return await self._post(path, model)

    async def audit_transaction(
        self,
        company_code: str,
        transaction_code: str,
    ) -> dict[str, Any]:
        """Get audit information about a transaction.

        Includes the server timestamp and duration of the original call
        and a reconstructed copy of the create request.
        """
        path = f"/api/v2/companies/{company_code}/transactions/{transaction_code}/audit"
        return await self._get(path)

    async def audit_transaction_with_type(
        self,
        company_code: str,
        transaction_code: str,
        document_type: DocumentTypeParam,
    ) -> dict[str, Any]:
        """Get audit information about a transaction of a given document type."""
        path = (
            f"/api/v2/companies/{company_code}/transactions/{transaction_code}"
            f"/types/{document_type}/audit"
        )
        return await self._get(path)

    async def bulk_lock_transaction(self, model: RequestBody) -> dict[str, Any]:
        """Lock a set of documents by document ID.

        Locked documents can no longer be voided. Available by invitation only.

        Args:
            model: Document IDs and lock flag (``BulkLockTransactionModel``)
        """
        path = "/api/v2/transactions/lock"
        return await self._post(path, model)

    async def change_transaction_code(
        self,
        company_code: str,
        transaction_code: str,
        model: RequestBody,
    ) -> dict[str, Any]:
        """Change a transaction's code.

        Only allowed while the transaction is ``Saved`` or ``Posted``. The
        transaction is addressed by its new code afterwards.
        """
        path = f"/api/v2/companies/{company_code}/transactions/{transaction_code}/changecode"
        return await self._post(path, model)

    async def commit_transaction(
        self,
        company_code: str,
        transaction_code: str,
        model: RequestBody,
    ) -> dict[str, Any]:
        """Commit a transaction for reporting."""
        path = f"/api/v2/companies/{company_code}/transactions/{transaction_code}/commit"
        return await self._post(path, model)

    async def create_or_adjust_transaction(
        self,
        model: RequestBody,
        options: QueryOptions | None = None,
    ) -> dict[str, Any]:
        """Create a new transaction or adjust the existing one with the same code.

        Useful for idempotent integrations. Fails with
        ``CannotModifyLockedTransaction`` when the existing transaction has been
        reported on a tax filing.
        """
        path = "/api/v2/transactions/createoradjust"
        return await self._post(path, model, options)

    async def create_transaction(
        self,
        model: RequestBody,
        options: QueryOptions | None = None,
    ) -> dict[str, Any]:
        """Create a new transaction.

        Without a ``type`` on the model the service returns a ``SalesOrder``
        estimate that is not recorded. Creating a transaction whose code
        already exists as committed is an error; use
        ``create_or_adjust_transaction`` for that case.

        Args:
            model: The transaction (``CreateTransactionModel``)
            options: Query options, e.g. ``{"$include": "Summary,Addresses"}``

        Returns:
            The calculated transaction
        """
        path = "/api/v2/transactions/create"
        return await self._post(path, model, options)

    async def delete_lines(
        self,
        model: RequestBody,
        options: QueryOptions | None = None,
    ) -> dict[str, Any]:
        """Remove lines from an existing unlocked transaction."""
        path = "/api/v2/companies/transactions/lines/delete"
        return await self._post(path, model, options)

    async def get_transaction_by_code(
        self,
        company_code: str,
        transaction_code: str,
        options: QueryOptions | None = None,
    ) -> dict[str, Any]:
        """Retrieve the current ``SalesInvoice`` transaction with this code.

        Use ``get_transaction_by_code_and_type`` for other document types.
        If the transaction was adjusted, the latest revision is returned.
        """
        path = f"/api/v2/companies/{company_code}/transactions/{transaction_code}"
        return await self._get(path, options)

    async def get_transaction_by_code_and_type(
        self,
        company_code: str,
        transaction_code: str,
        document_type: DocumentTypeParam,
        options: QueryOptions | None = None,
    ) -> dict[str, Any]:
        """Retrieve the current transaction with this code and document type."""
        path = (
            f"/api/v2/companies/{company_code}/transactions/{transaction_code}"
            f"/types/{document_type}"
        )
        return await self._get(path, options)

    async def get_transaction_by_id(
        self,
        id: int,
        options: QueryOptions | None = None,
    ) -> dict[str, Any]:
        """Retrieve a single transaction by its unique ID.

        Returns exactly this revision, even if it was later adjusted.
        """
        path = f"/api/v2/transactions/{id}"
        return await self._get(path, options)

    async def list_transactions_by_company(
        self,
        company_code: str,
        options: QueryOptions | None = None,
    ) -> dict[str, Any]:
        """List transactions recorded by a company.

        The service returns at most 1000 rows per call and, without a date
        criterion in ``$filter``, only looks at the past 30 days.

        Args:
            company_code: Company that recorded the transactions
            options: ``$include``, ``$filter``, ``$top``, ``$skip``, ``$orderBy``

        Returns:
            A fetch result: ``{"@recordsetCount": ..., "value": [...], "@nextLink": ...}``
        """
        path = f"/api/v2/companies/{company_code}/transactions"
        return await self._get(path, options)

    async def lock_transaction(
        self,
        company_code: str,
        transaction_code: str,
        model: RequestBody,
    ) -> dict[str, Any]:
        """Lock a single transaction.

        Simulates the lock applied when a document is reported. Sandbox only
        (AvaTaxPro); by invitation on production.
        """
        path = f"/api/v2/companies/{company_code}/transactions/{transaction_code}/lock"
        return await self._post(path, model)

    async def refund_transaction(
        self,
        company_code: str,
        transaction_code: str,
        model: RequestBody,
        options: QueryOptions | None = None,
    ) -> dict[str, Any]:
        """Create a refund (``ReturnInvoice``) for a previous sale.

        Supports full, partial (selected lines), tax-only and percentage
        refunds. The refunded tax matches the tax calculated on the original.

        Args:
            company_code: Company that made the original sale
            transaction_code: Code of the original sale
            model: The refund to create (``RefundTransactionModel``)
            options: Query options, e.g. ``{"$include": "Lines"}``
        """
        path = f"/api/v2/companies/{company_code}/transactions/{transaction_code}/refund"
        return await self._post(path, model, options)

    async def settle_transaction(
        self,
        company_code: str,
        transaction_code: str,
        model: RequestBody,
    ) -> dict[str, Any]:
        """Verify, change code and/or commit in a single call."""
        path = f"/api/v2/companies/{company_code}/transactions/{transaction_code}/settle"
        return await self._post(path, model)

    async def verify_transaction(
        self,
        company_code: str,
        transaction_code: str,
        model: RequestBody,
    ) -> dict[str, Any]:
        """Verify that a transaction matches expected values.

        The service answers with an error code naming the first mismatch.
        """
        path = f"/api/v2/companies/{company_code}/transactions/{transaction_code}/verify"
        return await self._post(path, model)

    async def void_transaction(
        self,
        company_code: str,
        transaction_code: str,
        model: RequestBody,
    ) -> dict[str, Any]:
        """Void a transaction.

        The transaction's status becomes ``Cancelled`` with the given reason
        code (usually ``DocVoided``). Reported transactions cannot be voided.
        """
        path = f"/api/v2/companies/{company_code}/transactions/{transaction_code}/void"
        return await self._post(path, model)

    async def iter_transactions_by_company(
        self,
        company_code: str,
        options: QueryOptions | None = None,
        *,
        page_size: int = MAX_PAGE_SIZE,
        limit: int | None = None,
    ) -> AsyncIterator[dict[str, Any]]:
        """Iterate over all transactions of a company, page by page.

        Pages are fetched with ``$top``/``$skip`` on a copy of ``options``.
        The next page is only fetched when the consumer continues iterating.

        Args:
            company_code: Company that recorded the transactions
            options: Query options; a ``$skip`` here sets the starting offset
            page_size: Rows per request (max 1000)
            limit: Maximum rows to yield (None = unlimited)

        Yields:
            Raw transaction dicts from each page's ``value``
        """
        if limit is not None and limit <= 0:
            return

        page_size = max(1, min(page_size, MAX_PAGE_SIZE))
        page_options: dict[str, Any] = dict(options or {})
        skip = int(page_options.get("$skip") or 0)
        yielded = 0

        while True:
            page_options["$top"] = page_size
            page_options["$skip"] = skip
            page = await self.list_transactions_by_company(company_code, dict(page_options))

            rows = page.get("value") or []
            for row in rows:
                if limit is not None and yielded >= limit:
                    return
                yield row
                yielded += 1

            if limit is not None and yielded >= limit:
                return
            total = page.get("@recordsetCount")
            if len(rows) < page_size:
                break
            if total is not None and skip + len(rows) >= total:
                break
            skip += len(rows)
