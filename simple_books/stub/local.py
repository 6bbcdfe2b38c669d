from typing import Optional

from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from .database import get_db, init_db, make_engine
from .main import create_app


def local_client(database_url: Optional[str] = "sqlite://") -> TestClient:
    """In-process client for a new stub app bound to its own freshly seeded database."""
    engine = make_engine(database_url)
    init_db(engine)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app = create_app()
    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)
