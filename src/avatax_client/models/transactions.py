"""Transaction-related models."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

# =============================================================================
# Enums
# =============================================================================


class DocumentType(StrEnum):
    """Kind of transaction document."""

    SALES_ORDER = "SalesOrder"  # Estimate, not recorded
    SALES_INVOICE = "SalesInvoice"
    PURCHASE_ORDER = "PurchaseOrder"
    PURCHASE_INVOICE = "PurchaseInvoice"
    RETURN_ORDER = "ReturnOrder"
    RETURN_INVOICE = "ReturnInvoice"
    INVENTORY_TRANSFER_ORDER = "InventoryTransferOrder"
    INVENTORY_TRANSFER_INVOICE = "InventoryTransferInvoice"
    REVERSE_CHARGE_ORDER = "ReverseChargeOrder"
    REVERSE_CHARGE_INVOICE = "ReverseChargeInvoice"
    ANY = "Any"


class DocumentStatus(StrEnum):
    """Transaction status as reported by the service."""

    TEMPORARY = "Temporary"
    SAVED = "Saved"
    POSTED = "Posted"
    COMMITTED = "Committed"
    CANCELLED = "Cancelled"
    ADJUSTED = "Adjusted"
    QUEUED = "Queued"
    PENDING_APPROVAL = "PendingApproval"
    ANY = "Any"


class VoidReasonCode(StrEnum):
    """Reason for voiding a transaction."""

    UNSPECIFIED = "Unspecified"
    POST_FAILED = "PostFailed"
    DOC_DELETED = "DocDeleted"
    DOC_VOIDED = "DocVoided"
    ADJUSTMENT_CANCELLED = "AdjustmentCancelled"


class AdjustmentReason(StrEnum):
    """Reason for adjusting a transaction."""

    NOT_ADJUSTED = "NotAdjusted"
    SOURCING_ISSUE = "SourcingIssue"
    RECONCILED_WITH_GENERAL_LEDGER = "ReconciledWithGeneralLedger"
    EXEMPT_CERT_APPLIED = "ExemptCertApplied"
    PRICE_ADJUSTED = "PriceAdjusted"
    PRODUCT_RETURNED = "ProductReturned"
    PRODUCT_EXCHANGED = "ProductExchanged"
    BAD_DEBT = "BadDebt"
    OTHER = "Other"
    OFFLINE = "Offline"


class RefundType(StrEnum):
    """Kind of refund to create from an existing sale."""

    FULL = "Full"
    PARTIAL = "Partial"
    TAX_ONLY = "TaxOnly"
    PERCENTAGE = "Percentage"


# =============================================================================
# Request models
# =============================================================================


class AddressLocationInfo(BaseModel):
    """An address or geocode used as a tax location."""

    location_code: str | None = Field(default=None, alias="locationCode")
    line1: str | None = Field(default=None)
    line2: str | None = Field(default=None)
    line3: str | None = Field(default=None)
    city: str | None = Field(default=None)
    region: str | None = Field(default=None)
    country: str | None = Field(default=None)
    postal_code: str | None = Field(default=None, alias="postalCode")
    latitude: Decimal | None = Field(default=None)
    longitude: Decimal | None = Field(default=None)

    model_config = {"populate_by_name": True}


class AddressesModel(BaseModel):
    """Set of addresses for a transaction or line.

    Use ``single_location`` when origin and destination are the same place.
    """

    single_location: AddressLocationInfo | None = Field(default=None, alias="singleLocation")
    ship_from: AddressLocationInfo | None = Field(default=None, alias="shipFrom")
    ship_to: AddressLocationInfo | None = Field(default=None, alias="shipTo")
    point_of_order_origin: AddressLocationInfo | None = Field(
        default=None, alias="pointOfOrderOrigin"
    )
    point_of_order_acceptance: AddressLocationInfo | None = Field(
        default=None, alias="pointOfOrderAcceptance"
    )

    model_config = {"populate_by_name": True}

    @property
    def is_empty(self) -> bool:
        """True when no address has been set."""
        return not any(
            (
                self.single_location,
                self.ship_from,
                self.ship_to,
                self.point_of_order_origin,
                self.point_of_order_acceptance,
            )
        )


class LineItemModel(BaseModel):
    """A line item on a transaction request."""

    number: str | None = Field(default=None)
    quantity: Decimal | None = Field(default=None)
    amount: Decimal
    addresses: AddressesModel | None = Field(default=None)
    tax_code: str | None = Field(default=None, alias="taxCode")
    customer_usage_type: str | None = Field(default=None, alias="customerUsageType")
    entity_use_code: str | None = Field(default=None, alias="entityUseCode")
    item_code: str | None = Field(default=None, alias="itemCode")
    exemption_code: str | None = Field(default=None, alias="exemptionCode")
    discounted: bool | None = Field(default=None)
    tax_included: bool | None = Field(default=None, alias="taxIncluded")
    revenue_account: str | None = Field(default=None, alias="revenueAccount")
    ref1: str | None = Field(default=None)
    ref2: str | None = Field(default=None)
    description: str | None = Field(default=None)

    model_config = {"populate_by_name": True}


class CreateTransactionModel(BaseModel):
    """Request body for creating a transaction."""

    code: str | None = Field(default=None)
    lines: list[LineItemModel] = Field(default_factory=list)
    type: DocumentType | None = Field(default=None)
    company_code: str | None = Field(default=None, alias="companyCode")
    transaction_date: date = Field(alias="date")
    salesperson_code: str | None = Field(default=None, alias="salespersonCode")
    customer_code: str = Field(alias="customerCode")
    customer_usage_type: str | None = Field(default=None, alias="customerUsageType")
    entity_use_code: str | None = Field(default=None, alias="entityUseCode")
    discount: Decimal | None = Field(default=None)
    purchase_order_no: str | None = Field(default=None, alias="purchaseOrderNo")
    exemption_no: str | None = Field(default=None, alias="exemptionNo")
    addresses: AddressesModel | None = Field(default=None)
    parameters: list[dict[str, Any]] | None = Field(default=None)
    reference_code: str | None = Field(default=None, alias="referenceCode")
    reporting_location_code: str | None = Field(default=None, alias="reportingLocationCode")
    commit: bool | None = Field(default=None)
    batch_code: str | None = Field(default=None, alias="batchCode")
    currency_code: str | None = Field(default=None, alias="currencyCode")
    service_mode: str | None = Field(default=None, alias="serviceMode")
    exchange_rate: Decimal | None = Field(default=None, alias="exchangeRate")
    pos_lane_code: str | None = Field(default=None, alias="posLaneCode")
    business_identification_no: str | None = Field(
        default=None, alias="businessIdentificationNo"
    )
    is_seller_importer_of_record: bool | None = Field(
        default=None, alias="isSellerImporterOfRecord"
    )
    description: str | None = Field(default=None)
    email: str | None = Field(default=None)
    debug_level: str | None = Field(default=None, alias="debugLevel")

    model_config = {"populate_by_name": True}


class CreateOrAdjustTransactionModel(BaseModel):
    """Request body for create-or-adjust."""

    create_transaction_model: CreateTransactionModel = Field(alias="createTransactionModel")

    model_config = {"populate_by_name": True}


class AdjustTransactionModel(BaseModel):
    """Request body for adjusting a committed transaction."""

    adjustment_reason: AdjustmentReason = Field(alias="adjustmentReason")
    adjustment_description: str | None = Field(default=None, alias="adjustmentDescription")
    new_transaction: CreateTransactionModel = Field(alias="newTransaction")

    model_config = {"populate_by_name": True}


class VoidTransactionModel(BaseModel):
    """Request body for voiding a transaction."""

    code: VoidReasonCode = Field(default=VoidReasonCode.DOC_VOIDED)


class CommitTransactionModel(BaseModel):
    """Request body for committing (or uncommitting) a transaction."""

    commit: bool = Field(default=True)


class ChangeTransactionCodeModel(BaseModel):
    """Request body for renaming a transaction."""

    new_code: str = Field(alias="newCode")

    model_config = {"populate_by_name": True}


class LockTransactionModel(BaseModel):
    """Request body for locking a single transaction."""

    is_locked: bool = Field(default=True, alias="isLocked")

    model_config = {"populate_by_name": True}


class VerifyTransactionModel(BaseModel):
    """Expected values a transaction must match."""

    verify_transaction_date: date | None = Field(default=None, alias="verifyTransactionDate")
    verify_total_amount: Decimal | None = Field(default=None, alias="verifyTotalAmount")
    verify_total_tax: Decimal | None = Field(default=None, alias="verifyTotalTax")

    model_config = {"populate_by_name": True}


class SettleTransactionModel(BaseModel):
    """Combined verify / change-code / commit request."""

    verify: VerifyTransactionModel | None = Field(default=None)
    change_code: ChangeTransactionCodeModel | None = Field(default=None, alias="changeCode")
    commit: CommitTransactionModel | None = Field(default=None)

    model_config = {"populate_by_name": True}


class RefundTransactionModel(BaseModel):
    """Request body for refunding a previous sale."""

    refund_transaction_code: str | None = Field(default=None, alias="refundTransactionCode")
    refund_date: date = Field(alias="refundDate")
    refund_type: RefundType | None = Field(default=None, alias="refundType")
    refund_percentage: Decimal | None = Field(default=None, alias="refundPercentage")
    refund_lines: list[str] | None = Field(default=None, alias="refundLines")
    reference_code: str | None = Field(default=None, alias="referenceCode")

    model_config = {"populate_by_name": True}


class BulkLockTransactionModel(BaseModel):
    """Request body for locking several transactions by document ID."""

    document_ids: list[int] = Field(alias="documentIds")
    is_locked: bool = Field(default=True, alias="isLocked")

    model_config = {"populate_by_name": True}


class AddTransactionLineModel(BaseModel):
    """Request body for appending lines to an unlocked transaction."""

    company_code: str = Field(alias="companyCode")
    transaction_code: str = Field(alias="transactionCode")
    document_type: DocumentType | None = Field(default=None, alias="documentType")
    lines: list[LineItemModel]
    renumber: bool | None = Field(default=None)

    model_config = {"populate_by_name": True}


class RemoveTransactionLineModel(BaseModel):
    """Request body for removing lines from an unlocked transaction."""

    company_code: str = Field(alias="companyCode")
    transaction_code: str = Field(alias="transactionCode")
    document_type: DocumentType | None = Field(default=None, alias="documentType")
    lines: list[str]
    renumber: bool | None = Field(default=None)

    model_config = {"populate_by_name": True}


# =============================================================================
# Response models
# =============================================================================


class TransactionLineModel(BaseModel):
    """A calculated line on a stored transaction."""

    id: int | None = Field(default=None)
    transaction_id: int | None = Field(default=None, alias="transactionId")
    line_number: str | None = Field(default=None, alias="lineNumber")
    description: str | None = Field(default=None)
    item_code: str | None = Field(default=None, alias="itemCode")
    quantity: Decimal | None = Field(default=None)
    line_amount: Decimal | None = Field(default=None, alias="lineAmount")
    tax: Decimal | None = Field(default=None)
    tax_code: str | None = Field(default=None, alias="taxCode")
    taxable_amount: Decimal | None = Field(default=None, alias="taxableAmount")
    exempt_amount: Decimal | None = Field(default=None, alias="exemptAmount")
    details: list[dict[str, Any]] | None = Field(default=None)

    model_config = {"populate_by_name": True}


class TransactionModel(BaseModel):
    """A transaction as stored by the service."""

    id: int | None = Field(default=None)
    code: str | None = Field(default=None)
    company_id: int | None = Field(default=None, alias="companyId")
    transaction_date: date | None = Field(default=None, alias="date")
    status: DocumentStatus | str | None = Field(default=None)
    type: DocumentType | str | None = Field(default=None)
    customer_code: str | None = Field(default=None, alias="customerCode")
    currency_code: str | None = Field(default=None, alias="currencyCode")
    reference_code: str | None = Field(default=None, alias="referenceCode")
    locked: bool | None = Field(default=None)
    version: int | None = Field(default=None)
    total_amount: Decimal | None = Field(default=None, alias="totalAmount")
    total_exempt: Decimal | None = Field(default=None, alias="totalExempt")
    total_taxable: Decimal | None = Field(default=None, alias="totalTaxable")
    total_tax: Decimal | None = Field(default=None, alias="totalTax")
    total_tax_calculated: Decimal | None = Field(default=None, alias="totalTaxCalculated")
    adjustment_reason: AdjustmentReason | str | None = Field(
        default=None, alias="adjustmentReason"
    )
    modified_date: datetime | None = Field(default=None, alias="modifiedDate")
    lines: list[TransactionLineModel] = Field(default_factory=list)
    addresses: list[dict[str, Any]] | None = Field(default=None)
    summary: list[dict[str, Any]] | None = Field(default=None)
    messages: list[dict[str, Any]] | None = Field(default=None)

    model_config = {"populate_by_name": True}

    @property
    def is_committed(self) -> bool:
        """Check whether the service reports this transaction as committed."""
        return self.status == DocumentStatus.COMMITTED


class TransactionListResult(BaseModel):
    """One page of results from the list-transactions endpoint."""

    transactions: list[TransactionModel] = Field(default_factory=list)
    count: int | None = Field(default=None)
    next_link: str | None = Field(default=None)

    @property
    def has_more(self) -> bool:
        """Check if the service advertised a next page."""
        return bool(self.next_link)

    @classmethod
    def from_api_response(cls, data: dict) -> TransactionListResult:
        """Parse from raw API response."""
        return cls(
            transactions=[TransactionModel.model_validate(t) for t in data.get("value", [])],
            count=data.get("@recordsetCount"),
            next_link=data.get("@nextLink"),
        )


class AuditTransactionModel(BaseModel):
    """Audit information for a transaction."""

    company_id: int | None = Field(default=None, alias="companyId")
    server_timestamp: datetime | None = Field(default=None, alias="serverTimestamp")
    server_duration: str | None = Field(default=None, alias="serverDuration")
    api_call_status: str | None = Field(default=None, alias="apiCallStatus")
    original: dict[str, Any] | None = Field(default=None)
    reconstructed: dict[str, Any] | None = Field(default=None)

    model_config = {"populate_by_name": True}


class BulkLockTransactionResult(BaseModel):
    """Result of a bulk lock request."""

    number_of_records: int | None = Field(default=None, alias="numberOfRecords")

    model_config = {"populate_by_name": True}
