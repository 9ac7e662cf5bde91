"""Domain Errors - Centralized Exception Hierarchy"""
from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base domain error - all errors extend this"""

    error_code: str = "DOMAIN_ERROR"
    http_status: int = 400

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to API response dict"""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }


# Authentication
class AuthenticationError(DomainError):
    """Admin credential missing or invalid"""
    error_code = "AUTHENTICATION_ERROR"
    http_status = 401


# Validation Errors
class ValidationError(DomainError):
    """Input validation failed"""
    error_code = "VALIDATION_ERROR"
    http_status = 400


# Not Found Errors
class NotFoundError(DomainError):
    """Resource not found"""
    error_code = "NOT_FOUND"
    http_status = 404


class IssueNotFoundError(NotFoundError):
    """Issue record not found"""
    error_code = "ISSUE_NOT_FOUND"


# Conflict Errors
class ConflictError(DomainError):
    """Resource conflict (e.g., concurrent modification)"""
    error_code = "CONFLICT"
    http_status = 409


class ConcurrencyError(ConflictError):
    """Conditional update kept losing against concurrent writers"""
    error_code = "CONCURRENCY_CONFLICT"


# Storage Errors
class StorageError(DomainError):
    """Document store write failed"""
    error_code = "STORAGE_ERROR"
    http_status = 500


class ComplaintIdExhaustedError(DomainError):
    """Could not find a free complaint ID"""
    error_code = "COMPLAINT_ID_EXHAUSTED"
    http_status = 503
