"""Routes for the per-store attribute tables: categories, sizes, colors, genders.

All four share one shape (a name, plus a value except for categories), so the
routers are built from a single factory. Mounted under /api/{storeId}/<plural>.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from catalog_admin.deps import require_user, require_owner, not_found, json_body
from catalog_admin.models.store import get_db
from catalog_admin.models.attributes import Category, Size, Color, Gender
from catalog_admin.schemas.attributes import CategoryOut, SizeOut, ColorOut, GenderOut
from catalog_admin.schemas.store import CountOut
from catalog_admin.utils.security import get_current_user_id
from catalog_admin.utils.validation import Text, validate_payload, require_path_param

logger = logging.getLogger(__name__)


def attribute_to_out(row, schema, has_value: bool):
    data = dict(
        id=row.id,
        storeId=row.store_id,
        name=row.name,
        createdAt=row.created_at,
        updatedAt=row.updated_at,
    )
    if has_value:
        data["value"] = row.value
    return schema(**data)


def build_router(model, schema, label: str, plural: str, has_value: bool = True) -> APIRouter:
    """Build the collection and single-record routes for one attribute model.

    label is the capitalised entity name used in messages ("Gender"), plural
    the route segment ("genders") that also prefixes the route names.
    """
    router = APIRouter()
    rules = [Text("name", "Name")]
    if has_value:
        rules.append(Text("value", "Value"))
    fields = ["name", "value"] if has_value else ["name"]

    @router.get("", response_model=List[schema], name=f"{plural}_get_all")
    def list_items(storeId: str, db: Session = Depends(get_db)):
        require_path_param(storeId, "Store id")
        rows = db.query(model).filter(model.store_id == storeId).order_by(model.created_at.desc()).all()
        return [attribute_to_out(r, schema, has_value) for r in rows]

    @router.post("", response_model=schema, name=f"{plural}_post")
    def create_item(
        storeId: str,
        payload: Optional[dict] = Depends(json_body),
        db: Session = Depends(get_db),
        user_id: Optional[str] = Depends(get_current_user_id),
    ):
        user_id = require_user(user_id)
        body = validate_payload(payload, rules)
        require_path_param(storeId, "Store id")
        require_owner(db, storeId, user_id)

        row = model(store_id=storeId, **{f: body[f] for f in fields})
        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info("Created %s %s in store %s", label.lower(), row.id, storeId)
        return attribute_to_out(row, schema, has_value)

    @router.get("/{id}", response_model=Optional[schema], name=f"{plural}_get")
    def get_item(id: str, db: Session = Depends(get_db)):
        require_path_param(id, f"{label} id")
        row = db.query(model).filter(model.id == id).first()
        if not row:
            return not_found(label)
        return attribute_to_out(row, schema, has_value)

    @router.patch("/{id}", response_model=CountOut, name=f"{plural}_patch")
    def update_item(
        storeId: str,
        id: str,
        payload: Optional[dict] = Depends(json_body),
        db: Session = Depends(get_db),
        user_id: Optional[str] = Depends(get_current_user_id),
    ):
        user_id = require_user(user_id)
        body = validate_payload(payload, rules)
        require_path_param(id, f"{label} id")
        require_owner(db, storeId, user_id)

        count = (
            db.query(model)
            .filter(model.id == id, model.store_id == storeId)
            .update({getattr(model, f): body[f] for f in fields}, synchronize_session=False)
        )
        db.commit()
        logger.info("Updated %s %s in store %s (count=%s)", label.lower(), id, storeId, count)
        return CountOut(count=count)

    @router.delete("/{id}", response_model=CountOut, name=f"{plural}_delete")
    def delete_item(
        storeId: str,
        id: str,
        db: Session = Depends(get_db),
        user_id: Optional[str] = Depends(get_current_user_id),
    ):
        user_id = require_user(user_id)
        require_path_param(id, f"{label} id")
        require_owner(db, storeId, user_id)

        count = (
            db.query(model)
            .filter(model.id == id, model.store_id == storeId)
            .delete(synchronize_session=False)
        )
        db.commit()
        logger.info("Deleted %s %s in store %s (count=%s)", label.lower(), id, storeId, count)
        return CountOut(count=count)

    return router


categories = build_router(Category, CategoryOut, "Category", "categories", has_value=False)
sizes = build_router(Size, SizeOut, "Size", "sizes")
colors = build_router(Color, ColorOut, "Color", "colors")
genders = build_router(Gender, GenderOut, "Gender", "genders")
