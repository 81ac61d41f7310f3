"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateIdentityError(DomainError):
    """An account with the same normalized email already exists."""


class InvalidCredentialsError(DomainError):
    """Email/password pair did not authenticate.

    Raised for both unknown email and wrong password, with the same message.
    """


class HashingError(DomainError):
    """Password hashing failed for reasons unrelated to the input."""


class StoreError(DomainError):
    """Persistence layer failed (connection lost, timeout, ...)."""


class TokenError(DomainError):
    """Base class for bearer token validation failures."""


class MalformedTokenError(TokenError):
    """Token does not decode into header, claims and signature."""


class InvalidSignatureError(TokenError):
    """Signature does not match the header and claims."""


class TokenExpiredError(TokenError):
    """Token is past its expiry time."""
