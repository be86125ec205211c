from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.error = error
        self.errors = errors

    def to_content(self) -> Dict[str, Any]:
        content: Dict[str, Any] = {"success": False, "message": self.message}
        if self.errors is not None:
            content["errors"] = self.errors
        if self.error is not None:
            content["error"] = self.error
        return content


class ValidationError(AppError):
    status_code = 400


class AuthenticationError(AppError):
    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class PersistenceError(AppError):
    status_code = 500


class InternalError(AppError):
    """Unexpected failure caught at a handler boundary."""

    status_code = 500
