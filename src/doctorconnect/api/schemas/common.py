"""
Common schemas and reusable components for the API envelope.
"""

import uuid
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ...application.dto.pagination import Page
from ...core.utils.datetime_utils import utc_now

T = TypeVar("T")

# ============================================================================
# BASE RESPONSE SCHEMAS
# ============================================================================


def _timestamp() -> str:
    return utc_now().isoformat()


class ApiResponse(BaseModel, Generic[T]):
    success: bool = Field(True, description="Operation success status")
    message: str = Field("", description="Response message")
    timestamp: str = Field(default_factory=_timestamp, description="Response timestamp")
    request_id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Request ID for tracking")
    data: Optional[T] = Field(None, description="Response payload")


class ErrorResponse(BaseModel):
    """Standardized error response schema."""

    success: bool = Field(False, description="Operation success status")
    error: str = Field(..., description="Error type/code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: str = Field(default_factory=_timestamp, description="Error timestamp")
    request_id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Request ID for tracking")


# ============================================================================
# PAGINATION
# ============================================================================


class PaginatedData(BaseModel, Generic[T]):
    """One page of a listing. Paging fields serialize in camelCase."""

    model_config = ConfigDict(populate_by_name=True)

    items: List[T] = Field(default_factory=list)
    total: int = Field(0, description="Total matching records")
    current_page: int = Field(1, alias="currentPage")
    total_pages: int = Field(0, alias="totalPages")
    has_next: bool = Field(False, alias="hasNext")
    has_prev: bool = Field(False, alias="hasPrev")

    @classmethod
    def from_page(cls, page: Page, items: List[Any]) -> "PaginatedData":
        return cls(
            items=items,
            total=page.total,
            current_page=page.page,
            total_pages=page.total_pages,
            has_next=page.has_next,
            has_prev=page.has_prev,
        )


# Shared OpenAPI error documentation for routers
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation or state transition error"},
    401: {"model": ErrorResponse, "description": "Missing or unknown credentials"},
    403: {"model": ErrorResponse, "description": "Invalid token or insufficient role"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
}
