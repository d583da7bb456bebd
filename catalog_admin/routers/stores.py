from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from catalog_admin.deps import require_user, not_found, json_body
from catalog_admin.models.store import Store, get_db
from catalog_admin.schemas.store import StoreOut, CountOut
from catalog_admin.utils.security import get_current_user_id
from catalog_admin.utils.validation import Text, validate_payload, require_path_param

logger = logging.getLogger(__name__)

router = APIRouter()

STORE_RULES = [Text("name", "Name")]


def _to_out(s: Store) -> StoreOut:
    return StoreOut(
        id=s.id,
        name=s.name,
        userId=s.user_id,
        createdAt=s.created_at,
        updatedAt=s.updated_at,
    )


@router.post("", response_model=StoreOut, name="stores_post")
def create_store(
    payload: Optional[dict] = Depends(json_body),
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_current_user_id),
):
    user_id = require_user(user_id)
    body = validate_payload(payload, STORE_RULES)
    store = Store(name=body["name"], user_id=user_id)
    db.add(store)
    db.commit()
    db.refresh(store)
    logger.info("Created store %s for user %s", store.id, user_id)
    return _to_out(store)


@router.get("", response_model=List[StoreOut], name="stores_get_all")
def get_user_stores(db: Session = Depends(get_db), user_id: Optional[str] = Depends(get_current_user_id)):
    user_id = require_user(user_id)
    stores = db.query(Store).filter(Store.user_id == user_id).order_by(Store.created_at.asc()).all()
    return [_to_out(s) for s in stores]


@router.get("/{storeId}", response_model=Optional[StoreOut], name="stores_get")
def get_store(storeId: str, db: Session = Depends(get_db)):
    require_path_param(storeId, "Store id")
    store = db.query(Store).filter(Store.id == storeId).first()
    if not store:
        return not_found("Store")
    return _to_out(store)


# Updates and deletes are scoped to the caller's own stores, so a non-owner gets count 0
@router.patch("/{storeId}", response_model=CountOut, name="stores_patch")
def update_store(
    storeId: str,
    payload: Optional[dict] = Depends(json_body),
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_current_user_id),
):
    user_id = require_user(user_id)
    body = validate_payload(payload, STORE_RULES)
    require_path_param(storeId, "Store id")
    count = (
        db.query(Store)
        .filter(Store.id == storeId, Store.user_id == user_id)
        .update({Store.name: body["name"]}, synchronize_session=False)
    )
    db.commit()
    logger.info("Renamed store %s (count=%s)", storeId, count)
    return CountOut(count=count)


@router.delete("/{storeId}", response_model=CountOut, name="stores_delete")
def delete_store(storeId: str, db: Session = Depends(get_db), user_id: Optional[str] = Depends(get_current_user_id)):
    user_id = require_user(user_id)
    require_path_param(storeId, "Store id")
    count = (
        db.query(Store)
        .filter(Store.id == storeId, Store.user_id == user_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info("Deleted store %s (count=%s)", storeId, count)
    return CountOut(count=count)
