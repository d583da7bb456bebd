from catalog_admin.client.forms import FieldSpec, FormConfig
from catalog_admin.client.schemas import CategoryFormValues, AttributeFormValues, ProductFormValues


def _in_use(plural: str, entity: str) -> str:
    return f"Make sure you removed all {plural} using this {entity} first."


def attribute_config(entity: str, plural: str, value_placeholder: str) -> FormConfig:
    return FormConfig(
        entity=entity,
        plural=plural,
        schema=AttributeFormValues,
        fields=[
            FieldSpec("name", "Name", placeholder=f"{entity.capitalize()} name"),
            FieldSpec("value", "Value", placeholder=value_placeholder),
        ],
        defaults={"name": "", "value": ""},
        delete_error=_in_use("products", entity),
    )


SIZE_FORM = attribute_config("size", "sizes", "Size value")
COLOR_FORM = attribute_config("color", "colors", "#000000")
GENDER_FORM = attribute_config("gender", "genders", "Gender value")

CATEGORY_FORM = FormConfig(
    entity="category",
    plural="categories",
    schema=CategoryFormValues,
    fields=[FieldSpec("name", "Name", placeholder="Category name")],
    defaults={"name": ""},
    delete_error=_in_use("products", "category"),
)

PRODUCT_FORM = FormConfig(
    entity="product",
    plural="products",
    schema=ProductFormValues,
    fields=[
        FieldSpec("images", "Images", kind="images"),
        FieldSpec("name", "Name", placeholder="Product name"),
        FieldSpec("price", "Price", placeholder="9.99", kind="number"),
        FieldSpec("quantity", "Quantity", placeholder="1", kind="number"),
        FieldSpec("categoryId", "Category", placeholder="Select a category", kind="select"),
        FieldSpec("genderId", "Gender", placeholder="Select a Gender", kind="select"),
        FieldSpec("sizeId", "Size", placeholder="Select a size", kind="select"),
        FieldSpec("colorId", "Color", placeholder="Select a color", kind="select"),
        FieldSpec(
            "isFeatured", "Featured",
            description="This product will appear on the home page.",
            kind="checkbox",
        ),
        FieldSpec(
            "isArchived", "Archived",
            description="This product will not appear anywhere in the store.",
            kind="checkbox",
        ),
    ],
    defaults={
        "name": "",
        "images": [],
        "price": 0,
        "quantity": 0,
        "categoryId": "",
        "colorId": "",
        "sizeId": "",
        "genderId": "",
        "isFeatured": False,
        "isArchived": False,
    },
    numeric_fields=["price", "quantity"],
    delete_error="Make sure nothing else in the store still uses this product first.",
)

FORMS = {c.plural: c for c in (CATEGORY_FORM, SIZE_FORM, COLOR_FORM, GENDER_FORM, PRODUCT_FORM)}
