"""JWT implementation of TokenService (HMAC-signed compact JWS via python-jose).

Validation runs in three stages so callers can tell failures apart in logs:
structure (MalformedTokenError), signature (InvalidSignatureError), then
expiry (TokenExpiredError). Clients only ever see a single 401.
"""

import binascii
import re
from datetime import datetime, timezone

from jose import jws, jwt
from jose.exceptions import JWSError, JWTError
from jose.utils import base64url_decode, base64url_encode

from domain.model.errors import InvalidSignatureError, MalformedTokenError, TokenExpiredError
from utils.config import AuthSettings

# Unpadded base64url alphabet, as issued tokens use
_SEGMENT_RE = re.compile(r"[A-Za-z0-9_-]*")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JWTTokenService:
    def __init__(self, settings: AuthSettings):
        self._secret = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.ttl = settings.token_ttl

    def __repr__(self) -> str:
        return f"JWTTokenService(algorithm={self.algorithm!r}, ttl={self.ttl!r})"

    def issue(self, user_id: str, now: datetime | None = None) -> str:
        """Create a signed access token for user_id.

        iat/exp are NumericDates; fractional seconds are kept so a token is
        valid for exactly the configured TTL.
        """
        now = now or _utcnow()
        payload = {
            "sub": user_id,
            "iat": now.timestamp(),
            "exp": (now + self.ttl).timestamp(),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def validate(self, token: str, now: datetime | None = None) -> str:
        """Verify token and return its subject (user ID).

        Raises:
            MalformedTokenError: not three decodable segments, or bad claims
            InvalidSignatureError: signature mismatch, non-canonical signature
                encoding or unexpected algorithm
            TokenExpiredError: now is at or after exp
        """
        claims = self._unverified_claims(token)
        self._check_signature_encoding(token.rsplit(".", 1)[1])

        try:
            # HMAC comparison inside jose uses hmac.compare_digest
            jws.verify(token, self._secret, algorithms=[self.algorithm])
        except (JWSError, JWTError) as e:
            raise InvalidSignatureError(str(e)) from e

        user_id = claims.get("sub")
        expires_at = claims.get("exp")
        if not isinstance(user_id, str) or not user_id:
            raise MalformedTokenError("Token has no subject")
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            raise MalformedTokenError("Token has no valid expiry")

        now = now or _utcnow()
        if now.timestamp() >= expires_at:
            raise TokenExpiredError("Token has expired")

        return user_id

    @staticmethod
    def _unverified_claims(token: str) -> dict:
        if not isinstance(token, str) or token.count(".") != 2:
            raise MalformedTokenError("Token must have three segments")

        header, claims, _ = token.split(".")
        # base64url decoding skips stray characters, so check the alphabet first
        if not header or not claims or not all(_SEGMENT_RE.fullmatch(s) for s in (header, claims)):
            raise MalformedTokenError("Token segments must be unpadded base64url")
        try:
            # Signature is checked separately; an empty one always decodes
            return jwt.get_unverified_claims(f"{header}.{claims}.")
        except JWTError as e:
            raise MalformedTokenError(str(e)) from e

    @staticmethod
    def _check_signature_encoding(signature: str) -> None:
        """Reject any signature text other than the one canonical encoding.

        The decoder ignores padding bits in the last character and trailing
        '=', so several strings decode to the same bytes; only the string we
        would have produced is accepted.
        """
        if not _SEGMENT_RE.fullmatch(signature):
            raise InvalidSignatureError("Signature is not unpadded base64url")
        try:
            decoded = base64url_decode(signature.encode("ascii"))
        except (binascii.Error, ValueError) as e:
            raise InvalidSignatureError("Signature is not valid base64url") from e
        if base64url_encode(decoded).decode("ascii") != signature:
            raise InvalidSignatureError("Signature is not canonically encoded")
