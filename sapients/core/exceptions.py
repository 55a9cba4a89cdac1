"""Custom exception classes for the tracker."""

from fastapi import HTTPException, status


class SapientsError(Exception):
    """Base exception for the tracker."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(SapientsError):
    """Raised at startup when static tables or settings are inconsistent."""
    pass


class StorageUnavailableError(SapientsError):
    """Raised when the relational store cannot be reached."""
    pass


class ResourceConflictError(SapientsError):
    """Raised when a resource already exists."""
    pass


class ValidationError(SapientsError):
    """Raised when input validation fails."""
    pass


class RedirectRequired(SapientsError):
    """Raised by page guards; the app answers with a redirect to `location`."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"Redirect to {location}")


# HTTP exception shortcuts
def forbidden(detail: str = "Access denied") -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def bad_request(detail: str = "Bad request") -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
