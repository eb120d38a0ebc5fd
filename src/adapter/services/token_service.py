import uuid
from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from pydantic import ValidationError

from src.app.services.token_service import ITokenService, TokenClaims

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class JoseTokenService(ITokenService):
    """
    JWT implementation of the token service (python-jose).

    Access and refresh tokens are signed with distinct secrets and carry a
    "type" claim, so neither kind verifies as the other. Every token gets a
    random jti: refresh tokens are stored by value and two tokens minted in
    the same second for the same user must still differ.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_expires: timedelta = timedelta(minutes=15),
        refresh_expires: timedelta = timedelta(days=7),
        algorithm: str = "HS256",
    ):
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.access_expires = access_expires
        self.refresh_expires = refresh_expires
        self.algorithm = algorithm

    def issue_access_token(self, claims: TokenClaims) -> str:
        return self._encode(claims, ACCESS_TOKEN_TYPE, self.access_secret, self.access_expires)

    def issue_refresh_token(self, claims: TokenClaims) -> str:
        return self._encode(
            claims, REFRESH_TOKEN_TYPE, self.refresh_secret, self.refresh_expires
        )

    def verify_access_token(self, token: str) -> Optional[TokenClaims]:
        return self._decode(token, ACCESS_TOKEN_TYPE, self.access_secret)

    def verify_refresh_token(self, token: str) -> Optional[TokenClaims]:
        return self._decode(token, REFRESH_TOKEN_TYPE, self.refresh_secret)

    def _encode(
        self, claims: TokenClaims, token_type: str, secret: str, expires: timedelta
    ) -> str:
        now = datetime.now(UTC)
        payload = {
            "user_id": claims.user_id,
            "email": claims.email,
            "role": claims.role,
            "type": token_type,
            "jti": uuid.uuid4().hex,
            "exp": now + expires,
            "iat": now,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def _decode(self, token: str, token_type: str, secret: str) -> Optional[TokenClaims]:
        """
        Verify and decode a token.

        Bad signature, malformed structure, expiry and wrong type all
        return None so callers cannot tell the causes apart.
        """
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except JWTError:
            return None

        if payload.get("type") != token_type:
            return None

        try:
            return TokenClaims(
                user_id=payload["user_id"],
                email=payload["email"],
                role=payload["role"],
            )
        except (KeyError, ValidationError):
            return None
