import time
import uuid
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from ..auth import get_current_client
from ..database import get_db
from ..models import ApiClient, Book, Order
from simple_books.schemas.order import (
    OrderCreated,
    OrderCreateRequest,
    OrderResponse,
    OrderUpdateRequest,
)

router = APIRouter(prefix="/orders", tags=["orders"])


def _serialize(order: Order) -> dict:
    return OrderResponse.model_validate(order).model_dump(by_alias=True)


def _owned_order(db: Session, order_id: str, client: ApiClient) -> Order:
    order = db.query(Order).filter(Order.id == order_id, Order.created_by == client.id).first()
    if not order:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No order with id {order_id}.")
    return order


@router.post("", status_code=status.HTTP_201_CREATED)
def create_order(
    payload: Optional[OrderCreateRequest] = Body(default=None),
    db: Session = Depends(get_db),
    client: ApiClient = Depends(get_current_client),
):
    if payload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or missing bookId.")
    book = db.get(Book, payload.book_id)
    if not book:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or missing bookId.")
    if not book.available:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="This book is not in stock. Try again later.")
    order = Order(
        id=uuid.uuid4().hex[:21],
        book_id=book.id,
        customer_name=payload.customer_name,
        created_by=client.id,
        quantity=payload.quantity or 1,
        timestamp=int(time.time() * 1000),
    )
    db.add(order)
    db.commit()
    return OrderCreated(order_id=order.id).model_dump(by_alias=True)


@router.get("")
def list_orders(db: Session = Depends(get_db), client: ApiClient = Depends(get_current_client)):
    orders = db.query(Order).filter(Order.created_by == client.id).order_by(Order.timestamp, Order.id).all()
    return [_serialize(o) for o in orders]


@router.get("/{order_id}")
def get_order(order_id: str, db: Session = Depends(get_db), client: ApiClient = Depends(get_current_client)):
    return _serialize(_owned_order(db, order_id, client))


@router.patch("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_order(
    order_id: str,
    payload: Optional[OrderUpdateRequest] = Body(default=None),
    db: Session = Depends(get_db),
    client: ApiClient = Depends(get_current_client),
):
    order = _owned_order(db, order_id, client)
    if payload is None or (payload.customer_name is None and payload.quantity is None):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nothing to update.")
    if payload.customer_name is not None:
        order.customer_name = payload.customer_name
    if payload.quantity is not None:
        order.quantity = payload.quantity
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: str, db: Session = Depends(get_db), client: ApiClient = Depends(get_current_client)):
    order = _owned_order(db, order_id, client)
    db.delete(order)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
