"""Error taxonomy shared by the access layer and the API."""


class JoblyError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None, status: int | None = None):
        self.message = message or self.default_message
        if status is not None:
            self.status = status
        super().__init__(self.message)


class NotFoundError(JoblyError):
    """Key or identifier does not resolve to a row."""

    status = 404
    default_message = "Not Found"


class BadRequestError(JoblyError):
    """Missing/invalid data, duplicates, or references to missing parents."""

    status = 400
    default_message = "Bad Request"


class UnauthorizedError(JoblyError):
    """Authentication failed or is missing."""

    status = 401
    default_message = "Unauthorized"


class ForbiddenError(JoblyError):
    """Authenticated, but not allowed to do this."""

    status = 403
    default_message = "Forbidden"
