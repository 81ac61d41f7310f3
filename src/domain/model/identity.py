from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Identity resolved from a validated bearer token, scoped to one request."""
    user_id: str
