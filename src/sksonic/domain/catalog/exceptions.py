"""Catalog exceptions. Every one of them is fatal for the running client."""


class CatalogError(Exception):
    """Base exception for catalog operations."""

    pass


class TransportError(CatalogError):
    """Raised when the HTTP request itself fails."""

    pass


class ApiStatusError(CatalogError):
    """Raised when the server answers with a status other than "ok"."""

    def __init__(self, operation: str, status: str, message: str | None = None):
        self.operation = operation
        self.status = status
        self.server_message = message
        detail = f": {message}" if message else ""
        super().__init__(f"{operation} returned status '{status}'{detail}")


class MalformedResponseError(CatalogError):
    """Raised when a response document is missing expected fields."""

    pass
