from datetime import datetime
from typing import Protocol


class TokenService(Protocol):
    """Protocol for issuing and validating signed bearer tokens."""
    def issue(self, user_id: str, now: datetime | None = None) -> str:
        """Return a signed token whose subject is user_id."""
        ...

    def validate(self, token: str, now: datetime | None = None) -> str:
        """Return the subject user ID.

        Raises MalformedTokenError, InvalidSignatureError or TokenExpiredError.
        """
        ...
