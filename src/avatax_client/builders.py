"""Type-safe transaction builders for AvaTax API."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from avatax_client.models.transactions import (
    AddressesModel,
    AddressLocationInfo,
    CreateTransactionModel,
    DocumentType,
    LineItemModel,
)

__all__ = [
    "TransactionBuilder",
    # Re-exported enums
    "DocumentType",
]


def _address(
    line1: str | None,
    *,
    city: str | None,
    region: str | None,
    postal_code: str | None,
    country: str | None,
    latitude: float | None,
    longitude: float | None,
) -> AddressLocationInfo:
    return AddressLocationInfo(
        line1=line1,
        city=city,
        region=region,
        postal_code=postal_code,
        country=country,
        latitude=Decimal(str(latitude)) if latitude is not None else None,
        longitude=Decimal(str(longitude)) if longitude is not None else None,
    )


class TransactionBuilder:
    """Fluent builder for create-transaction requests.

    Example:
        model = (
            TransactionBuilder("DEFAULT")
            .sales_invoice()
            .code("INV-001")
            .customer("ABC")
            .ship_from("2000 Main Street", city="Irvine", region="CA", postal_code="92614")
            .ship_to("1100 2nd Ave", city="Seattle", region="WA", postal_code="98101")
            .line(100, item_code="Y0001", tax_code="PS081282")
            .commit()
            .build()
        )

        # Then use with TransactionsAPI:
        tx = await client.transactions.create_transaction(model)
    """

    def __init__(self, company_code: str) -> None:
        """Initialize builder with the company recording the transaction.

        Args:
            company_code: Company code (e.g., "DEFAULT")
        """
        self._company_code = company_code
        self._type: DocumentType = DocumentType.SALES_ORDER
        self._code: str | None = None
        self._customer_code: str | None = None
        self._date: dt.date | None = None
        self._addresses = AddressesModel()
        self._lines: list[LineItemModel] = []
        self._commit: bool = False
        self._currency_code: str | None = None
        self._reference_code: str | None = None
        self._description: str | None = None

    # Document type methods
    def document_type(self, document_type: DocumentType | str) -> TransactionBuilder:
        """Set the document type."""
        self._type = DocumentType(document_type)
        return self

    def sales_order(self) -> TransactionBuilder:
        """Estimate only, not recorded (default)."""
        self._type = DocumentType.SALES_ORDER
        return self

    def sales_invoice(self) -> TransactionBuilder:
        """Record a sale."""
        self._type = DocumentType.SALES_INVOICE
        return self

    def purchase_invoice(self) -> TransactionBuilder:
        """Record a purchase."""
        self._type = DocumentType.PURCHASE_INVOICE
        return self

    def return_invoice(self) -> TransactionBuilder:
        """Record a return (refund)."""
        self._type = DocumentType.RETURN_INVOICE
        return self

    # Identity methods
    def code(self, code: str) -> TransactionBuilder:
        """Set the transaction code (generated by the service if omitted)."""
        self._code = code
        return self

    def customer(self, customer_code: str) -> TransactionBuilder:
        """Set the customer code."""
        self._customer_code = customer_code
        return self

    def date(self, date: dt.date) -> TransactionBuilder:
        """Set the document date (defaults to today)."""
        self._date = date
        return self

    def reference(self, reference_code: str) -> TransactionBuilder:
        """Set a reference code (e.g., an order number)."""
        self._reference_code = reference_code
        return self

    def description(self, description: str) -> TransactionBuilder:
        """Set a free-form description."""
        self._description = description
        return self

    def currency(self, currency_code: str) -> TransactionBuilder:
        """Set the ISO 4217 currency code."""
        self._currency_code = currency_code.upper()
        return self

    # Address methods
    def ship_from(
        self,
        line1: str | None = None,
        *,
        city: str | None = None,
        region: str | None = None,
        postal_code: str | None = None,
        country: str | None = "US",
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> TransactionBuilder:
        """Set the origin address."""
        self._addresses.ship_from = _address(
            line1,
            city=city,
            region=region,
            postal_code=postal_code,
            country=country,
            latitude=latitude,
            longitude=longitude,
        )
        return self

    def ship_to(
        self,
        line1: str | None = None,
        *,
        city: str | None = None,
        region: str | None = None,
        postal_code: str | None = None,
        country: str | None = "US",
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> TransactionBuilder:
        """Set the destination address."""
        self._addresses.ship_to = _address(
            line1,
            city=city,
            region=region,
            postal_code=postal_code,
            country=country,
            latitude=latitude,
            longitude=longitude,
        )
        return self

    def single_location(
        self,
        line1: str | None = None,
        *,
        city: str | None = None,
        region: str | None = None,
        postal_code: str | None = None,
        country: str | None = "US",
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> TransactionBuilder:
        """Use one address as both origin and destination (e.g., retail)."""
        self._addresses.single_location = _address(
            line1,
            city=city,
            region=region,
            postal_code=postal_code,
            country=country,
            latitude=latitude,
            longitude=longitude,
        )
        return self

    # Line methods
    def line(
        self,
        amount: Decimal | float | str,
        *,
        quantity: Decimal | float | str = 1,
        item_code: str | None = None,
        tax_code: str | None = None,
        description: str | None = None,
        number: str | None = None,
        addresses: AddressesModel | None = None,
    ) -> TransactionBuilder:
        """Add a line item.

        Lines are numbered "1", "2", ... in the order added unless
        ``number`` is given.
        """
        self._lines.append(
            LineItemModel(
                number=number or str(len(self._lines) + 1),
                quantity=Decimal(str(quantity)),
                amount=Decimal(str(amount)),
                item_code=item_code,
                tax_code=tax_code,
                description=description,
                addresses=addresses,
            )
        )
        return self

    # Other options
    def commit(self, enabled: bool = True) -> TransactionBuilder:
        """Commit the transaction on creation."""
        self._commit = enabled
        return self

    def build(self) -> CreateTransactionModel:
        """Build the create-transaction request.

        Returns:
            CreateTransactionModel ready for create_transaction()

        Raises:
            ValueError: If required fields are missing
        """
        if not self._customer_code:
            raise ValueError("Customer code required - call customer()")
        if not self._lines:
            raise ValueError("At least one line required - call line()")
        if self._addresses.is_empty:
            for line in self._lines:
                if line.addresses is None or line.addresses.is_empty:
                    raise ValueError(
                        f"Line {line.number} has no address and no document address is set"
                    )

        return CreateTransactionModel(
            code=self._code,
            type=self._type,
            company_code=self._company_code,
            transaction_date=self._date or dt.date.today(),
            customer_code=self._customer_code,
            addresses=None if self._addresses.is_empty else self._addresses.model_copy(deep=True),
            lines=[line.model_copy(deep=True) for line in self._lines],
            commit=self._commit or None,
            currency_code=self._currency_code,
            reference_code=self._reference_code,
            description=self._description,
        )
