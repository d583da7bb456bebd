from typing import Optional
from fastapi import HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from catalog_admin.config import get_settings
from catalog_admin.utils.security import owns_store


def add_cors(app, origins=None):
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def require_user(user_id: Optional[str]) -> str:
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthenticated")
    return user_id


def require_owner(db: Session, store_id: str, user_id: str) -> None:
    if not owns_store(db, store_id, user_id):
        raise HTTPException(status_code=403, detail="Unauthorized")


def not_found(label: str):
    """Answer for an unknown single record: null, or 404 when NOT_FOUND_AS_404 is set."""
    if get_settings().NOT_FOUND_AS_404:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return None


async def json_body(request: Request) -> Optional[dict]:
    """Request body as a JSON object; None when missing, malformed or not an object."""
    try:
        payload = await request.json()
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None
