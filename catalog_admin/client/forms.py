"""Dashboard create/edit/delete forms driven by a per-entity FormConfig.

A form instance targets one record (or none, for create). Submitting posts to
the collection or patches the record, then navigates back to the list and
raises a toast; failures only raise a toast. While a request is in flight the
form is "submitting" and refuses another submit or delete.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type
import logging

import requests
from pydantic import BaseModel

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong!"

IDLE = "idle"
SUBMITTING = "submitting"


class FormBusyError(RuntimeError):
    """Raised when a form is asked to act while a request is still in flight."""


@dataclass
class FieldSpec:
    name: str
    label: str
    placeholder: str = ""
    description: Optional[str] = None
    # text, number, select, images, checkbox
    kind: str = "text"


@dataclass
class FormConfig:
    entity: str  # singular, lower case: "gender"
    plural: str  # route segment: "genders"
    schema: Type[BaseModel]
    fields: List[FieldSpec]
    defaults: Dict[str, Any]
    delete_error: str = GENERIC_ERROR
    # fields coerced to numbers when editing an existing record
    numeric_fields: List[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        return self.entity.capitalize()


class Notifier:
    """Collects toast notifications."""

    def __init__(self):
        self.messages = []

    def success(self, message: str) -> None:
        logger.info("[toast:success] %s", message)
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        logger.warning("[toast:error] %s", message)
        self.messages.append(("error", message))


class Navigator:
    """Records dashboard navigation."""

    def __init__(self, path: str = "/"):
        self.path = path
        self.history = [path]
        self.refreshes = 0

    def push(self, path: str) -> None:
        logger.debug("Navigate %s -> %s", self.path, path)
        self.path = path
        self.history.append(path)

    def refresh(self) -> None:
        self.refreshes += 1


class ResourceForm:
    def __init__(
        self,
        config: FormConfig,
        store_id: str,
        initial_data: Optional[dict] = None,
        session=None,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        notifier: Optional[Notifier] = None,
        navigator: Optional[Navigator] = None,
    ):
        self.config = config
        self.store_id = store_id
        self.initial_data = initial_data
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.notifier = notifier or Notifier()
        self.navigator = navigator or Navigator()
        self.state = IDLE

    # --- presentation ---

    @property
    def loading(self) -> bool:
        return self.state == SUBMITTING

    @property
    def title(self) -> str:
        return f"Edit {self.config.entity}" if self.initial_data else f"Create {self.config.entity}"

    @property
    def description(self) -> str:
        return f"Edit a {self.config.entity}" if self.initial_data else f"Add a new {self.config.entity}"

    @property
    def toast_message(self) -> str:
        return f"{self.config.label} updated." if self.initial_data else f"{self.config.label} created."

    @property
    def action(self) -> str:
        return "Save changes" if self.initial_data else "Create"

    def default_values(self) -> dict:
        if not self.initial_data:
            return dict(self.config.defaults)
        values = {k: self.initial_data.get(k, v) for k, v in self.config.defaults.items()}
        for name in self.config.numeric_fields:
            values[name] = float(values[name])
        if "images" in values:
            values["images"] = [{"url": img["url"]} for img in values["images"] or []]
        return values

    # --- routes ---

    @property
    def list_path(self) -> str:
        return f"/{self.store_id}/{self.config.plural}"

    @property
    def collection_url(self) -> str:
        return f"{self.base_url}/api/{self.store_id}/{self.config.plural}"

    @property
    def record_url(self) -> str:
        return f"{self.collection_url}/{self.initial_data['id']}"

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    # --- actions ---

    def _begin(self) -> None:
        if self.state == SUBMITTING:
            raise FormBusyError(f"{self.config.label} form is busy")
        self.state = SUBMITTING

    def submit(self, values: dict) -> bool:
        """Validate and send the form; returns True on success.

        Invalid values raise pydantic.ValidationError before any request.
        """
        data = self.config.schema.model_validate(values).model_dump()
        self._begin()
        try:
            if self.initial_data:
                response = self.session.patch(self.record_url, json=data, headers=self._headers())
            else:
                response = self.session.post(self.collection_url, json=data, headers=self._headers())
            if response.status_code >= 400:
                logger.error("%s %s failed: %s %s", self.config.entity, self.action, response.status_code, response.text)
                self.notifier.error(GENERIC_ERROR)
                return False
            self.navigator.refresh()
            self.navigator.push(self.list_path)
            self.notifier.success(self.toast_message)
            return True
        except requests.RequestException as e:
            logger.error("%s request failed: %s", self.config.entity, e)
            self.notifier.error(GENERIC_ERROR)
            return False
        finally:
            self.state = IDLE

    def delete(self, confirm: Callable[[], bool]) -> bool:
        """Delete the record once confirm() agrees; returns True on success."""
        if not self.initial_data:
            raise ValueError(f"Nothing to delete: {self.config.entity} form has no record")
        if not confirm():
            return False
        self._begin()
        try:
            response = self.session.delete(self.record_url, headers=self._headers())
            if response.status_code >= 400:
                self.notifier.error(self.config.delete_error)
                return False
            self.navigator.refresh()
            self.navigator.push(self.list_path)
            self.notifier.success(f"{self.config.label} deleted.")
            return True
        except requests.RequestException as e:
            logger.error("%s delete failed: %s", self.config.entity, e)
            self.notifier.error(self.config.delete_error)
            return False
        finally:
            self.state = IDLE
