from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from typing import Generator, Optional

from simple_books.core.config import get_settings
from .models import Base, Book

# 초기 카탈로그 (id 순서 고정)
SEED_BOOKS = [
    {"name": "The Russian", "author": "James Patterson and James O. Born", "isbn": "1780899475", "type": "fiction", "price": 12.98, "current_stock": 12},
    {"name": "Just as I Am", "author": "Cicely Tyson", "isbn": None, "type": "non-fiction", "price": 20.33, "current_stock": 0},
    {"name": "The Vanishing Half", "author": "Brit Bennett", "isbn": "0525536299", "type": "fiction", "price": 16.2, "current_stock": 987},
    {"name": "The Midnight Library", "author": "Matt Haig", "isbn": "0525559477", "type": "fiction", "price": 15.6, "current_stock": 87},
    {"name": "Untamed", "author": "Glennon Doyle", "isbn": "1984801252", "type": "non-fiction", "price": 22.48, "current_stock": 24},
    {"name": "Viscount Who Loved Me", "author": "Julia Quinn", "isbn": "0062424041", "type": "fiction", "price": 7.99, "current_stock": 49},
]


def make_engine(database_url: Optional[str] = None) -> Engine:
    url = database_url or get_settings().database_url
    if url.startswith("sqlite"):
        # in-memory DB 는 모든 커넥션이 같은 DB 를 보도록 StaticPool
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            future=True,
        )
    return create_engine(url, future=True)


def init_db(bind: Engine) -> None:
    Base.metadata.create_all(bind=bind)
    with Session(bind) as db:
        if db.query(Book).count() == 0:
            db.add_all(Book(**row) for row in SEED_BOOKS)
            db.commit()


engine = make_engine()
init_db(engine)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
