from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderCreateRequest(BaseModel):
    book_id: int = Field(..., alias="bookId")
    customer_name: str = Field(..., alias="customerName", min_length=1)
    quantity: Optional[int] = Field(None, ge=1)
    model_config = ConfigDict(populate_by_name=True)


class OrderUpdateRequest(BaseModel):
    customer_name: Optional[str] = Field(None, alias="customerName", min_length=1)
    quantity: Optional[int] = Field(None, ge=1)
    model_config = ConfigDict(populate_by_name=True)


class OrderCreated(BaseModel):
    created: bool = True
    order_id: str = Field(..., alias="orderId", min_length=1)
    model_config = ConfigDict(populate_by_name=True)


class OrderResponse(BaseModel):
    id: str
    book_id: int = Field(..., alias="bookId")
    customer_name: str = Field(..., alias="customerName")
    created_by: str = Field(..., alias="createdBy")
    quantity: int
    timestamp: int
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
