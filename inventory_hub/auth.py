"""ID token verification and authorization dependencies."""
from functools import lru_cache
from typing import Dict, Iterable, Optional

import httpx
import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel
from sqlalchemy.orm import Session

from inventory_hub.config import settings
from inventory_hub.database import get_db
from inventory_hub.models.user import User
from inventory_hub.services.users import ensure_user_record

logger = structlog.get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class TokenClaims(BaseModel):
    """Identity extracted from a verified ID token."""
    uid: str
    email: Optional[str] = None


class IdTokenVerifier:
    """
    Verifies ID tokens issued by the identity provider.

    Tokens are signed with rotating keys; the ``kid`` header selects one of
    the certificates published at ``certs_url``. Keys passed in explicitly
    are used as-is and never refreshed.
    """

    def __init__(
        self,
        project_id: str,
        certs_url: Optional[str] = None,
        keys: Optional[Dict[str, str]] = None,
        algorithms: Iterable[str] = ("RS256",),
    ):
        self.project_id = project_id
        self.certs_url = certs_url
        self.algorithms = list(algorithms)
        self._keys: Dict[str, str] = dict(keys or {})

    @property
    def issuer(self) -> str:
        return f"https://securetoken.google.com/{self.project_id}"

    def _fetch_keys(self) -> Dict[str, str]:
        response = httpx.get(self.certs_url, timeout=10.0)
        response.raise_for_status()
        return response.json()

    def _get_key(self, kid: Optional[str]) -> str:
        if kid not in self._keys and self.certs_url:
            self._keys = self._fetch_keys()
        if kid not in self._keys:
            raise JWTError(f"Unknown signing key: {kid}")
        return self._keys[kid]

    def verify(self, token: str) -> TokenClaims:
        """Verify ``token`` and return its claims.

        Raises:
            JWTError: if the token is malformed, expired, or not issued for
                this project.
        """
        header = jwt.get_unverified_header(token)
        key = self._get_key(header.get("kid"))
        payload = jwt.decode(
            token,
            key,
            algorithms=self.algorithms,
            audience=self.project_id,
            issuer=self.issuer,
        )
        uid = payload.get("sub") or payload.get("user_id")
        if not uid:
            raise JWTError("Token has no subject")
        return TokenClaims(uid=uid, email=payload.get("email"))


@lru_cache
def get_token_verifier() -> IdTokenVerifier:
    return IdTokenVerifier(
        project_id=settings.FIREBASE_PROJECT_ID,
        certs_url=settings.ID_TOKEN_CERTS_URL,
    )


def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: IdTokenVerifier = Depends(get_token_verifier),
) -> TokenClaims:
    """Verify the bearer token of the request."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
        )
    try:
        return verifier.verify(credentials.credentials)
    except (JWTError, httpx.HTTPError) as exc:
        logger.warning("token_verification_failed", error=str(exc))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )


def get_current_user(
    claims: TokenClaims = Depends(get_token_claims),
    db: Session = Depends(get_db),
) -> User:
    """Return the user record of the caller, creating it on first sight."""
    user, _ = ensure_user_record(db, claims.uid, claims.email)
    if user.is_blocked:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is blocked",
        )
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Require administrator role."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user
