"""API parameter types.

This module defines type aliases for the values accepted by the
Transactions endpoints. They document what the service understands;
the API layer passes every value through without checking it.

Note: These are separate from the StrEnum types in models/ which are
used for building request bodies and parsing API responses.
"""

from collections.abc import Mapping
from typing import Any, Literal, TypedDict

from pydantic import BaseModel

from avatax_client.models.transactions import DocumentType

# =============================================================================
# Common Types
# =============================================================================

QueryOptions = Mapping[str, Any]
"""Query-string options forwarded to the service as-is."""

RequestBody = BaseModel | Mapping[str, Any]
"""A request model or a plain JSON-compatible mapping."""

DocumentTypeParam = DocumentType | str
"""Document type path segment (enum member or raw string)."""

# =============================================================================
# Transaction Options
# =============================================================================

IncludeOption = Literal[
    "Lines",
    "Details",
    "Summary",
    "Addresses",
    "SummaryOnly",
    "LinesOnly",
    "ForceTimeout",
]
"""Values recognized by ``$include`` (comma-separated when combined).

Details implies Lines and Summary implies Details. When ``$include`` is
omitted on create/adjust/refund/line calls the service assumes
``Summary,Addresses``. ForceTimeout only applies to create calls.
"""

TransactionQueryOptions = TypedDict(
    "TransactionQueryOptions",
    {
        "$include": str | list[IncludeOption],
        "$filter": str,
        "$top": int,
        "$skip": int,
        "$orderBy": str,
        "documentType": DocumentTypeParam,
    },
    total=False,
)
"""Recognized query options for the Transactions endpoints.

``$filter`` uses the service's filter syntax (e.g. ``date gt '2024-01-01'``).
Listing without a date criterion only covers the past 30 days.
``$top``/``$skip`` paginate (max 1000 rows per page) and ``$orderBy`` takes
``(fieldname) [ASC|DESC]`` statements separated by commas.
"""
