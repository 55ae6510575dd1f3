"""Domain errors raised by services; routers map them to HTTP status codes."""


class ServiceError(Exception):
    """Base class for expected, caller-visible service failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConflictError(ServiceError):
    """A uniqueness rule would be violated (username/email/phone, role or app name)."""


class NotFoundError(ServiceError):
    """The referenced user, role, application or binding does not exist."""


class AuthenticationError(ServiceError):
    """Credentials did not match. The message never says which part was wrong."""


class InvalidTokenError(ServiceError):
    """A bearer token failed signature or expiry checks."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)
