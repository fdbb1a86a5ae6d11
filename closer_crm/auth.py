import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .errors import Forbidden, Unauthenticated
from .models import Role
from .security import decode_access_token

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported as 401 rather than 403
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Caller identity carried by the access token"""

    user_id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    @property
    def is_closer(self) -> bool:
        return self.role == Role.CLOSER.value


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Identity:
    """Verify the bearer token and return the caller identity"""
    if not credentials:
        raise Unauthenticated(
            "Not authenticated. Please provide a valid Bearer token in the Authorization header."
        )

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise Unauthenticated("Invalid or expired token", headers={"WWW-Authenticate": "Bearer"})

    user_id = payload.get("userId")
    role = payload.get("role")
    if not isinstance(user_id, int) or role not in (Role.ADMIN.value, Role.CLOSER.value):
        logger.warning(f"⚠️ Token with unexpected claims: {sorted(payload.keys())}")
        raise Unauthenticated("Invalid token claims")

    return Identity(user_id=user_id, role=role)


async def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_admin:
        logger.warning(f"⚠️ User {identity.user_id} ({identity.role}) attempted an admin-only action")
        raise Forbidden("Only ADMIN can perform this action")
    return identity


async def require_closer(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_closer:
        raise Forbidden("Only Closers can perform this action")
    return identity


def can_access(identity: Identity, owner_id: Optional[int]) -> bool:
    """ADMIN may act on anything; a Closer only on resources it owns"""
    return identity.is_admin or identity.user_id == owner_id


def ensure_can_access(identity: Identity, owner_id: Optional[int], detail: str = "Forbidden") -> None:
    if not can_access(identity, owner_id):
        logger.warning(f"⚠️ User {identity.user_id} denied access to resource owned by {owner_id}")
        raise Forbidden(detail)
