"""Pydantic models for AvaTax API requests and responses."""

from avatax_client.models.transactions import (
    AddressesModel,
    AddressLocationInfo,
    AddTransactionLineModel,
    AdjustmentReason,
    AdjustTransactionModel,
    AuditTransactionModel,
    BulkLockTransactionModel,
    BulkLockTransactionResult,
    ChangeTransactionCodeModel,
    CommitTransactionModel,
    CreateOrAdjustTransactionModel,
    CreateTransactionModel,
    DocumentStatus,
    DocumentType,
    LineItemModel,
    LockTransactionModel,
    RefundTransactionModel,
    RefundType,
    RemoveTransactionLineModel,
    SettleTransactionModel,
    TransactionLineModel,
    TransactionListResult,
    TransactionModel,
    VerifyTransactionModel,
    VoidReasonCode,
    VoidTransactionModel,
)

__all__ = [
    # Enums
    "AdjustmentReason",
    "DocumentStatus",
    "DocumentType",
    "RefundType",
    "VoidReasonCode",
    # Request models
    "AddressLocationInfo",
    "AddressesModel",
    "AddTransactionLineModel",
    "AdjustTransactionModel",
    "BulkLockTransactionModel",
    "ChangeTransactionCodeModel",
    "CommitTransactionModel",
    "CreateOrAdjustTransactionModel",
    "CreateTransactionModel",
    "LineItemModel",
    "LockTransactionModel",
    "RefundTransactionModel",
    "RemoveTransactionLineModel",
    "SettleTransactionModel",
    "VerifyTransactionModel",
    "VoidTransactionModel",
    # Response models
    "AuditTransactionModel",
    "BulkLockTransactionResult",
    "TransactionLineModel",
    "TransactionListResult",
    "TransactionModel",
]
