from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class StoreOut(BaseModel):
    id: str
    name: str
    userId: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class CountOut(BaseModel):
    """Outcome of an update-many or delete-many by id."""
    count: int
