# Catalog error taxonomy

from fastapi import status


class CatalogError(Exception):
    """Base class for errors surfaced by the catalog engine"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(CatalogError):
    """Malformed or incomplete input: missing field, unknown type, empty collection"""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(CatalogError):
    """No active record with the requested id"""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(CatalogError):
    """Identity already exists with different semantics, or a uniqueness rule is violated"""

    status_code = status.HTTP_409_CONFLICT


class InternalError(CatalogError):
    """Storage or unexpected failure"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
