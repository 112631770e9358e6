"""Error taxonomy shared by repositories, services and routes.

Repositories raise ``NoRowsError`` when a keyed lookup or delete matched
nothing. Services raise the ``ServiceError`` subclasses, each of which
knows the HTTP status and the public message the routes send back.
"""


class LMSError(Exception):
    """Base class for all application errors."""


class NoRowsError(LMSError, LookupError):
    """Zero rows matched a keyed query."""

    def __init__(self, message: str = "no rows in result set"):
        super().__init__(message)


class ServiceError(LMSError):
    """Error with a fixed HTTP mapping."""

    status_code = 500
    message = "internal server error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.message)


class ConvIDError(ServiceError):
    status_code = 400
    message = "converting id error"


class BadRequestError(ServiceError):
    status_code = 400
    message = "error bad request"


class NoRecordsError(ServiceError):
    status_code = 404
    message = "error no records"


class ConflictError(ServiceError):
    status_code = 409
    message = "error conflict"


class InvalidTokenError(LMSError):
    """Bearer token is missing, malformed, expired or badly signed."""


class MigrationError(LMSError):
    """A migration file could not be read or applied."""
