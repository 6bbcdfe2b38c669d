from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Book
from simple_books.schemas.book import BookDetail, BookSummary, BookType

router = APIRouter(prefix="/books", tags=["books"])

MAX_LIMIT = 20


@router.get("")
def list_books(type: Optional[str] = None, limit: Optional[str] = None, db: Session = Depends(get_db)):
    # 쿼리 파라미터 검증은 직접 (잘못된 값 -> 422 가 아니라 400)
    q = db.query(Book).order_by(Book.id)
    if type is not None:
        allowed = [t.value for t in BookType]
        if type not in allowed:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid value for query parameter 'type'. Must be one of: {', '.join(allowed)}.",
            )
        q = q.filter(Book.type == type)
    if limit is not None:
        if not limit.isdigit() or not 0 < int(limit) <= MAX_LIMIT:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid value for query parameter 'limit'. Must be greater than 0 and less than or equal to {MAX_LIMIT}.",
            )
        q = q.limit(int(limit))
    return [BookSummary.model_validate(b).model_dump(mode="json") for b in q.all()]


@router.get("/{book_id}")
def get_book(book_id: int, db: Session = Depends(get_db)):
    book = db.get(Book, book_id)
    if not book:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No book with id {book_id}")
    return BookDetail.model_validate(book).model_dump(mode="json", by_alias=True)
