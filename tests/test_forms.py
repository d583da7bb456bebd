import pydantic
import pytest

from catalog_admin.client.configs import GENDER_FORM, PRODUCT_FORM, CATEGORY_FORM, FORMS
from catalog_admin.client.forms import ResourceForm, FormBusyError, Notifier, Navigator, GENERIC_ERROR
from catalog_admin.models.attributes import Gender
from catalog_admin.models.product import Product
from conftest import OWNER_ID, OTHER_ID
from catalog_admin.utils.security import create_access_token

BASE_URL = "http://testserver"


def _form(config, store, session, initial_data=None, user_id=OWNER_ID):
    return ResourceForm(
        config,
        store.id,
        initial_data=initial_data,
        session=session,
        base_url=BASE_URL,
        token=create_access_token(user_id),
    )


def test_create_form_labels(client, store):
    form = _form(GENDER_FORM, store, client)
    assert form.title == "Create gender"
    assert form.description == "Add a new gender"
    assert form.action == "Create"
    assert form.default_values() == {"name": "", "value": ""}
    assert not form.loading


def test_edit_form_labels(client, store):
    form = _form(GENDER_FORM, store, client, initial_data={"id": "g1", "name": "Men", "value": "men"})
    assert form.title == "Edit gender"
    assert form.action == "Save changes"
    assert form.toast_message == "Gender updated."
    assert form.default_values() == {"name": "Men", "value": "men"}


def test_submit_creates_and_navigates(client, store, db):
    form = _form(GENDER_FORM, store, client)
    assert form.submit({"name": "Men", "value": "men"}) is True
    assert form.navigator.path == f"/{store.id}/genders"
    assert form.notifier.messages == [("success", "Gender created.")]
    assert form.state == "idle"
    assert db.query(Gender).filter(Gender.store_id == store.id).count() == 1


def test_submit_updates_existing_record(client, store, catalog, db):
    form = _form(GENDER_FORM, store, client, initial_data={"id": catalog["genderId"], "name": "Men", "value": "men"})
    assert form.submit({"name": "Boys", "value": "boys"}) is True
    assert form.notifier.messages == [("success", "Gender updated.")]
    db.expire_all()
    assert db.get(Gender, catalog["genderId"]).name == "Boys"


def test_invalid_values_never_reach_the_api(store):
    class ExplodingSession:
        def post(self, *args, **kwargs):
            raise AssertionError("request should not be sent")

    form = _form(GENDER_FORM, store, ExplodingSession())
    with pytest.raises(pydantic.ValidationError):
        form.submit({"name": "", "value": "men"})
    assert form.state == "idle"


def test_server_rejection_shows_generic_toast(client, store):
    form = _form(GENDER_FORM, store, client, user_id=OTHER_ID)
    assert form.submit({"name": "Men", "value": "men"}) is False
    assert form.notifier.messages == [("error", GENERIC_ERROR)]
    assert form.navigator.history == ["/"]


def test_second_submit_while_in_flight_is_refused(client, store):
    seen = []

    class ReentrantSession:
        def post(self, url, json=None, headers=None):
            with pytest.raises(FormBusyError):
                form.submit({"name": "Again", "value": "again"})
            seen.append(form.loading)
            return client.post(url, json=json, headers=headers)

    form = _form(GENDER_FORM, store, ReentrantSession())
    assert form.submit({"name": "Men", "value": "men"}) is True
    assert seen == [True]
    assert not form.loading


def test_delete_needs_confirmation(client, store, catalog, db):
    form = _form(GENDER_FORM, store, client, initial_data={"id": catalog["genderId"]})
    assert form.delete(confirm=lambda: False) is False
    assert db.query(Gender).count() == 1

    assert form.delete(confirm=lambda: True) is True
    assert form.notifier.messages == [("success", "Gender deleted.")]
    assert form.navigator.path == f"/{store.id}/genders"
    db.expire_all()
    assert db.query(Gender).count() == 0


def test_delete_of_referenced_gender_shows_dependency_hint(lenient_client, store, catalog):
    product_form = _form(PRODUCT_FORM, store, lenient_client)
    assert product_form.submit(
        {
            "name": "Tee",
            "images": [{"url": "a"}],
            "price": 10,
            "quantity": 1,
            **catalog,
        }
    )

    form = _form(GENDER_FORM, store, lenient_client, initial_data={"id": catalog["genderId"]})
    assert form.delete(confirm=lambda: True) is False
    assert form.notifier.messages == [("error", "Make sure you removed all products using this gender first.")]


def test_product_form_edit_coerces_numbers(client, store, catalog, db):
    create = _form(PRODUCT_FORM, store, client)
    assert create.submit({"name": "Tee", "images": [{"url": "a"}], "price": "12.5", "quantity": "3", **catalog})
    record = client.get(f"/api/{store.id}/products/{db.query(Product.id).scalar()}").json()

    edit = _form(PRODUCT_FORM, store, client, initial_data=record)
    values = edit.default_values()
    assert values["price"] == 12.5
    assert values["quantity"] == 3.0
    assert values["images"] == [{"url": "a"}]
    assert edit.title == "Edit product"

    values["images"] = [{"url": "b"}]
    assert edit.submit(values) is True
    updated = client.get(f"/api/{store.id}/products/{record['id']}").json()
    assert [i["url"] for i in updated["images"]] == ["b"]


def test_product_form_requires_positive_price(store):
    form = _form(PRODUCT_FORM, store, session=object())
    with pytest.raises(pydantic.ValidationError):
        form.submit({"name": "Tee", "images": [], "price": 0, "quantity": 0, "categoryId": "c", "sizeId": "s", "colorId": "c", "genderId": "g"})


def test_delete_without_record_is_an_error(client, store):
    with pytest.raises(ValueError):
        _form(CATEGORY_FORM, store, client).delete(confirm=lambda: True)


def test_registry_covers_every_resource():
    assert set(FORMS) == {"categories", "sizes", "colors", "genders", "products"}


def test_notifier_and_navigator_record():
    notifier, navigator = Notifier(), Navigator("/s1")
    notifier.success("ok")
    notifier.error("nope")
    navigator.push("/s1/genders")
    navigator.refresh()
    assert notifier.messages == [("success", "ok"), ("error", "nope")]
    assert navigator.history == ["/s1", "/s1/genders"]
    assert navigator.refreshes == 1


def test_failed_product_delete_shows_dependency_hint(client, store, catalog, db):
    create = _form(PRODUCT_FORM, store, client)
    assert create.submit({"name": "Tee", "images": [{"url": "a"}], "price": 10, "quantity": 1, **catalog})
    record = {"id": db.query(Product.id).scalar()}

    form = _form(PRODUCT_FORM, store, client, initial_data=record, user_id=OTHER_ID)
    assert form.delete(confirm=lambda: True) is False
    assert form.notifier.messages == [("error", "Make sure nothing else in the store still uses this product first.")]
    assert db.query(Product).count() == 1
