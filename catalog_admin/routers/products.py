from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, selectinload
from typing import List, Optional
import logging

from catalog_admin.deps import require_user, require_owner, not_found, json_body
from catalog_admin.models.store import get_db
from catalog_admin.models.attributes import Category, Size, Color, Gender
from catalog_admin.models.product import Product, Image
from catalog_admin.routers.attributes import attribute_to_out
from catalog_admin.schemas.attributes import CategoryOut, SizeOut, ColorOut, GenderOut
from catalog_admin.schemas.product import ProductOut, ImageOut
from catalog_admin.schemas.store import CountOut
from catalog_admin.utils.security import get_current_user_id
from catalog_admin.utils.validation import (
    FieldRule,
    Text,
    Price,
    Quantity,
    Images,
    validate_payload,
    require_path_param,
)

logger = logging.getLogger(__name__)

router = APIRouter()

CREATE_RULES = [
    Text("name", "Name"),
    Price("price", "Price"),
    Quantity("quantity", "Quantity"),
    FieldRule("categoryId", "Category id"),
    Images("images", "Images"),
]

UPDATE_RULES = [
    Text("name", "Name"),
    Price("price", "Price"),
    Quantity("quantity", "Quantity"),
    FieldRule("categoryId", "Category id"),
    FieldRule("colorId", "Color id"),
    FieldRule("sizeId", "Size id"),
    FieldRule("genderId", "Gender id"),
    Images("images", "Images"),
]

# body key -> (model, label) for the attribute references a product holds
REFERENCES = {
    "categoryId": (Category, "Category"),
    "sizeId": (Size, "Size"),
    "colorId": (Color, "Color"),
    "genderId": (Gender, "Gender"),
}

RELATION_SCHEMAS = {
    "category": (CategoryOut, False),
    "size": (SizeOut, True),
    "color": (ColorOut, True),
    "gender": (GenderOut, True),
}


# Helpers

def to_product_out(p: Product, include=()) -> ProductOut:
    data = dict(
        id=p.id,
        storeId=p.store_id,
        categoryId=p.category_id,
        sizeId=p.size_id,
        colorId=p.color_id,
        genderId=p.gender_id,
        name=p.name,
        price=p.price,
        quantity=p.quantity,
        isFeatured=bool(p.is_featured),
        isArchived=bool(p.is_archived),
        createdAt=p.created_at,
        updatedAt=p.updated_at,
        images=[
            ImageOut(id=i.id, productId=i.product_id, url=i.url, createdAt=i.created_at)
            for i in p.images
        ],
    )
    for relation in include:
        schema, has_value = RELATION_SCHEMAS[relation]
        row = getattr(p, relation)
        data[relation] = attribute_to_out(row, schema, has_value) if row is not None else None
    return ProductOut(**data)


def _check_references(db: Session, store_id: str, body: dict) -> None:
    """Attribute ids on a product must name rows of the same store."""
    for key, (model, label) in REFERENCES.items():
        ref_id = body.get(key)
        if not ref_id:
            continue
        exists = db.query(model.id).filter(model.id == ref_id, model.store_id == store_id).first()
        if not exists:
            raise HTTPException(status_code=400, detail=f"{label} id is invalid")


def _build_images(images: List[dict], product_id: Optional[str] = None) -> List[Image]:
    return [Image(product_id=product_id, url=img["url"], position=pos) for pos, img in enumerate(images)]


def _load_product(db: Session, product_id: str, store_id: Optional[str] = None):
    query = db.query(Product).options(selectinload(Product.images)).filter(Product.id == product_id)
    if store_id is not None:
        query = query.filter(Product.store_id == store_id)
    return query.first()


@router.post("", response_model=ProductOut, response_model_exclude_unset=True, name="product_post")
def create_product(
    storeId: str,
    payload: Optional[dict] = Depends(json_body),
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_current_user_id),
):
    user_id = require_user(user_id)
    body = validate_payload(payload, CREATE_RULES)
    require_path_param(storeId, "Store id")
    require_owner(db, storeId, user_id)
    _check_references(db, storeId, body)

    product = Product(
        store_id=storeId,
        name=body["name"],
        price=Decimal(str(body["price"])),
        quantity=int(Decimal(str(body["quantity"]))),
        category_id=body["categoryId"],
        size_id=body.get("sizeId") or None,
        color_id=body.get("colorId") or None,
        gender_id=body.get("genderId") or None,
        is_featured=bool(body.get("isFeatured", False)),
        is_archived=bool(body.get("isArchived", False)),
        images=_build_images(body["images"]),
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    logger.info("Created product %s in store %s with %d images", product.id, storeId, len(product.images))
    return to_product_out(product)


@router.get("", response_model=List[ProductOut], response_model_exclude_unset=True, name="product_get_all")
def get_all_products(
    storeId: str,
    categoryId: Optional[str] = None,
    colorId: Optional[str] = None,
    sizeId: Optional[str] = None,
    genderId: Optional[str] = None,
    isFeatured: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """List a store's non-archived products, newest first.

    Any non-empty isFeatured value (false included) keeps featured rows only;
    an omitted or empty one applies no featured filter.
    """
    require_path_param(storeId, "Store id")
    query = (
        db.query(Product)
        .options(selectinload(Product.images), selectinload(Product.category))
        .filter(Product.store_id == storeId, Product.is_archived == False)  # noqa: E712
    )
    if categoryId:
        query = query.filter(Product.category_id == categoryId)
    if colorId:
        query = query.filter(Product.color_id == colorId)
    if sizeId:
        query = query.filter(Product.size_id == sizeId)
    if genderId:
        query = query.filter(Product.gender_id == genderId)
    if isFeatured:
        query = query.filter(Product.is_featured == True)  # noqa: E712
    products = query.order_by(Product.created_at.desc()).all()
    return [to_product_out(p, include=("category",)) for p in products]


@router.get("/{productId}", response_model=Optional[ProductOut], response_model_exclude_unset=True, name="product_get")
def get_product(productId: str, db: Session = Depends(get_db)):
    require_path_param(productId, "Product id")
    product = _load_product(db, productId)
    if not product:
        return not_found("Product")
    return to_product_out(product, include=("category", "color", "size", "gender"))


@router.patch("/{productId}", response_model=Optional[ProductOut], response_model_exclude_unset=True, name="product_patch")
def update_product(
    storeId: str,
    productId: str,
    payload: Optional[dict] = Depends(json_body),
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_current_user_id),
):
    user_id = require_user(user_id)
    body = validate_payload(payload, UPDATE_RULES)
    require_path_param(productId, "Product id")
    require_owner(db, storeId, user_id)
    _check_references(db, storeId, body)

    product = _load_product(db, productId, store_id=storeId)
    if not product:
        return not_found("Product")

    product.name = body["name"]
    product.price = Decimal(str(body["price"]))
    product.quantity = int(Decimal(str(body["quantity"])))
    product.category_id = body["categoryId"]
    product.color_id = body["colorId"]
    product.size_id = body["sizeId"]
    product.gender_id = body["genderId"]
    if "isFeatured" in body:
        product.is_featured = bool(body["isFeatured"])
    if "isArchived" in body:
        product.is_archived = bool(body["isArchived"])

    # Full replacement of the image set; the delete and the inserts commit together
    db.query(Image).filter(Image.product_id == product.id).delete(synchronize_session=False)
    db.expire(product, ["images"])
    db.add_all(_build_images(body["images"], product_id=product.id))
    db.commit()
    db.refresh(product)
    logger.info("Updated product %s in store %s, images replaced (%d)", product.id, storeId, len(product.images))
    return to_product_out(product)


@router.delete("/{productId}", response_model=CountOut, name="product_delete")
def delete_product(
    storeId: str,
    productId: str,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_current_user_id),
):
    user_id = require_user(user_id)
    require_path_param(productId, "Product id")
    require_owner(db, storeId, user_id)

    # Images go with the product through ON DELETE CASCADE
    count = (
        db.query(Product)
        .filter(Product.id == productId, Product.store_id == storeId)
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info("Deleted product %s in store %s (count=%s)", productId, storeId, count)
    return CountOut(count=count)
