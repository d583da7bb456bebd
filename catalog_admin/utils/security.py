from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import logging
import uuid

from jose import jwt, JWTError

from catalog_admin.config import get_settings
from catalog_admin.models.store import Store

logger = logging.getLogger(__name__)

http_bearer = HTTPBearer(auto_error=False)


# ===== JWT helpers =====
def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload = {"sub": subject, "exp": expire, "iat": now, "nbf": now, "jti": uuid.uuid4().hex}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def get_current_user_id(token: HTTPAuthorizationCredentials = Depends(http_bearer)) -> Optional[str]:
    """Resolve the caller's user id from the bearer token.

    Returns None for a missing, malformed or expired token instead of raising,
    so each route decides where authentication sits in its check order.
    """
    if not token or not token.credentials:
        return None
    settings = get_settings()
    try:
        payload = jwt.decode(token.credentials, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.debug("Rejected bearer token: %s", e)
        return None
    return payload.get("sub") or None


def owns_store(db: Session, store_id: str, user_id: str) -> bool:
    """True when the store exists and is owned by user_id."""
    if not store_id or not user_id:
        return False
    store = db.query(Store).filter(Store.id == store_id, Store.user_id == user_id).first()
    return store is not None
