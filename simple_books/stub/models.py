from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Boolean,
    BigInteger,
    ForeignKey,
)
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()


class Book(Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False)
    isbn = Column(String(13), nullable=True)
    type = Column(String(20), nullable=False)  # fiction | non-fiction
    price = Column(Float, nullable=False)
    current_stock = Column(Integer, nullable=False, default=0)

    @property
    def available(self) -> bool:
        return self.current_stock > 0


class ApiClient(Base):
    __tablename__ = "api_clients"

    id = Column(String(32), primary_key=True)
    client_name = Column(String(255), nullable=False)
    client_email = Column(String(255), nullable=False, unique=True)

    orders = relationship("Order", back_populates="client", cascade="all, delete-orphan")


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(32), primary_key=True)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False)
    customer_name = Column(String(255), nullable=False)
    created_by = Column(String(32), ForeignKey("api_clients.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    timestamp = Column(BigInteger, nullable=False)  # epoch millis

    client = relationship("ApiClient", back_populates="orders")
    book = relationship("Book")
