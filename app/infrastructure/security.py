"""Access token verification against the identity provider's signing secret."""

from __future__ import annotations

from typing import Protocol

from jose import JWTError, jwt

from app.config import Settings, get_settings


class TokenVerifier(Protocol):
    """Capability that turns an access token into the authenticated user id."""

    async def verify_token(self, token: str) -> str:
        """Return the user id carried by ``token`` or raise ``ValueError``."""


class JwtTokenVerifier:
    """Verify identity provider JWTs signed with a shared secret."""

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        audience: str | None = None,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._audience = audience

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "JwtTokenVerifier":
        settings = settings or get_settings()
        return cls(
            settings.auth_jwt_secret,
            algorithm=settings.auth_jwt_algorithm,
            audience=settings.auth_jwt_audience,
        )

    def decode(self, token: str) -> dict:
        options = {"verify_aud": self._audience is not None}
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                options=options,
            )
        except JWTError as exc:
            raise ValueError("Could not validate credentials") from exc

    async def verify_token(self, token: str) -> str:
        payload = self.decode(token)
        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise ValueError("Could not validate credentials")
        return user_id


__all__ = ["JwtTokenVerifier", "TokenVerifier"]
