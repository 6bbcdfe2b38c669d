import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import ApiClient
from ..security import create_access_token
from simple_books.schemas.auth import AccessToken, ClientRegistration

router = APIRouter(prefix="/api-clients", tags=["api-clients"])


@router.post("/", status_code=status.HTTP_201_CREATED)
def register_client(data: ClientRegistration, db: Session = Depends(get_db)):
    existing = db.query(ApiClient).filter(ApiClient.client_email == data.client_email).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="API client already registered. Try a different email.",
        )
    client = ApiClient(id=uuid.uuid4().hex, client_name=data.client_name, client_email=data.client_email)
    db.add(client)
    db.commit()
    return AccessToken(access_token=create_access_token(client.id)).model_dump(by_alias=True)
