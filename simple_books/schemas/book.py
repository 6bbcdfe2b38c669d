from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BookType(str, Enum):
    FICTION = "fiction"
    NON_FICTION = "non-fiction"


class BookSummary(BaseModel):
    id: int
    name: str
    type: BookType
    available: bool
    model_config = ConfigDict(from_attributes=True)


class BookDetail(BookSummary):
    author: str
    isbn: Optional[str] = None
    price: float
    current_stock: int = Field(..., alias="current-stock")
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
