"""
API request/response schemas.
"""

from .common import ApiResponse, ErrorResponse, PaginatedData

__all__ = ["ApiResponse", "ErrorResponse", "PaginatedData"]
