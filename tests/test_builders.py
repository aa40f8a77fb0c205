"""Tests for transaction builders."""

from datetime import date
from decimal import Decimal

import pytest

from avatax_client.builders import DocumentType, TransactionBuilder
from avatax_client.models.transactions import AddressesModel, AddressLocationInfo


def _minimal() -> TransactionBuilder:
    return (
        TransactionBuilder("DEFAULT")
        .customer("ABC")
        .single_location("100 Ravine Lane NE", city="Bainbridge Island", region="WA")
        .line(100)
    )


class TestTransactionBuilder:
    """Tests for TransactionBuilder."""

    def test_minimal_transaction(self) -> None:
        """Build the smallest valid request."""
        model = _minimal().build()

        assert model.company_code == "DEFAULT"
        assert model.customer_code == "ABC"
        assert model.type == DocumentType.SALES_ORDER
        assert model.transaction_date == date.today()
        assert model.commit is None
        assert len(model.lines) == 1
        assert model.lines[0].amount == Decimal("100")
        assert model.lines[0].quantity == Decimal("1")

    def test_full_sales_invoice(self) -> None:
        """Build a committed invoice with separate origin and destination."""
        model = (
            TransactionBuilder("DEFAULT")
            .sales_invoice()
            .code("INV-001")
            .customer("ABC")
            .date(date(2024, 1, 15))
            .reference("PO-77")
            .description("Yarn order")
            .currency("usd")
            .ship_from("2000 Main Street", city="Irvine", region="CA", postal_code="92614")
            .ship_to("1100 2nd Ave", city="Seattle", region="WA", postal_code="98101")
            .line(100, item_code="Y0001", tax_code="PS081282")
            .commit()
            .build()
        )

        assert model.type == DocumentType.SALES_INVOICE
        assert model.code == "INV-001"
        assert model.transaction_date == date(2024, 1, 15)
        assert model.reference_code == "PO-77"
        assert model.description == "Yarn order"
        assert model.currency_code == "USD"
        assert model.commit is True
        assert model.addresses.ship_from.city == "Irvine"
        assert model.addresses.ship_to.postal_code == "98101"
        assert model.addresses.single_location is None
        assert model.lines[0].item_code == "Y0001"
        assert model.lines[0].tax_code == "PS081282"

    def test_serializes_with_service_field_names(self) -> None:
        """The dumped request should use the camelCase wire names."""
        model = (
            TransactionBuilder("DEFAULT")
            .sales_invoice()
            .customer("ABC")
            .date(date(2024, 1, 15))
            .ship_from("2000 Main Street", city="Irvine", region="CA", postal_code="92614")
            .line("19.99", quantity=2, tax_code="P0000000")
            .build()
        )

        data = model.model_dump(mode="json", by_alias=True, exclude_none=True)

        assert data["type"] == "SalesInvoice"
        assert data["companyCode"] == "DEFAULT"
        assert data["customerCode"] == "ABC"
        assert data["date"] == "2024-01-15"
        assert data["addresses"]["shipFrom"]["postalCode"] == "92614"
        assert data["addresses"]["shipFrom"]["country"] == "US"
        assert data["lines"] == [
            {"number": "1", "quantity": "2", "amount": "19.99", "taxCode": "P0000000"}
        ]
        assert "commit" not in data

    def test_lines_numbered_in_order(self) -> None:
        """Lines should be numbered 1, 2, ... unless a number is given."""
        model = _minimal().line(50).line(25, number="X9").line(10).build()

        assert [line.number for line in model.lines] == ["1", "2", "X9", "4"]

    def test_float_amount_kept_exact(self) -> None:
        """Float amounts should not pick up binary rounding noise."""
        model = (
            TransactionBuilder("DEFAULT")
            .customer("ABC")
            .single_location("1 Main St", city="Seattle", region="WA")
            .line(0.1)
            .build()
        )

        assert model.lines[0].amount == Decimal("0.1")

    def test_geocode_address(self) -> None:
        """Latitude/longitude should be accepted instead of a street address."""
        model = (
            TransactionBuilder("DEFAULT")
            .customer("ABC")
            .single_location(latitude=47.627935, longitude=-122.51702)
            .line(10)
            .build()
        )

        location = model.addresses.single_location
        assert location.line1 is None
        assert location.latitude == Decimal("47.627935")
        assert location.longitude == Decimal("-122.51702")

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            ("sales_order", DocumentType.SALES_ORDER),
            ("sales_invoice", DocumentType.SALES_INVOICE),
            ("purchase_invoice", DocumentType.PURCHASE_INVOICE),
            ("return_invoice", DocumentType.RETURN_INVOICE),
        ],
    )
    def test_document_type_shortcuts(self, method: str, expected: DocumentType) -> None:
        """Each shortcut should set its document type."""
        builder = _minimal()
        getattr(builder, method)()

        assert builder.build().type == expected

    def test_document_type_from_string(self) -> None:
        """document_type() should accept the service's string value."""
        model = _minimal().document_type("ReturnOrder").build()

        assert model.type == DocumentType.RETURN_ORDER

    def test_invalid_document_type(self) -> None:
        """Unknown document types should be rejected."""
        with pytest.raises(ValueError):
            TransactionBuilder("DEFAULT").document_type("Invoice")

    def test_commit_can_be_disabled(self) -> None:
        """commit(False) should leave the commit flag unset."""
        model = _minimal().commit().commit(False).build()

        assert model.commit is None

    def test_line_level_address(self) -> None:
        """A line with its own address should not need a document address."""
        line_addresses = AddressesModel(
            single_location=AddressLocationInfo(city="Seattle", region="WA", country="US")
        )

        model = (
            TransactionBuilder("DEFAULT")
            .customer("ABC")
            .line(10, addresses=line_addresses)
            .build()
        )

        assert model.addresses is None
        assert model.lines[0].addresses.single_location.city == "Seattle"

    def test_build_returns_independent_copies(self) -> None:
        """Building twice should not share mutable state."""
        builder = _minimal()
        first = builder.build()
        builder.line(5)
        second = builder.build()

        assert len(first.lines) == 1
        assert len(second.lines) == 2
        assert first.addresses is not second.addresses


class TestBuilderValidation:
    """Tests for builder validation."""

    def test_requires_customer(self) -> None:
        """Should raise if customer code not set."""
        builder = (
            TransactionBuilder("DEFAULT")
            .single_location("1 Main St", city="Seattle", region="WA")
            .line(10)
        )

        with pytest.raises(ValueError, match="Customer code required"):
            builder.build()

    def test_requires_line(self) -> None:
        """Should raise if no lines were added."""
        builder = (
            TransactionBuilder("DEFAULT")
            .customer("ABC")
            .single_location("1 Main St", city="Seattle", region="WA")
        )

        with pytest.raises(ValueError, match="At least one line required"):
            builder.build()

    def test_requires_address(self) -> None:
        """Should raise if neither the document nor the line has an address."""
        builder = TransactionBuilder("DEFAULT").customer("ABC").line(10)

        with pytest.raises(ValueError, match="Line 1 has no address"):
            builder.build()
