from datetime import datetime, timedelta, timezone
import uuid
from typing import Any, Dict
from jose import jwt, JWTError
from fastapi import HTTPException, status

from simple_books.core.config import get_settings


def create_access_token(client_id: str) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    to_encode: Dict[str, Any] = {
        "sub": client_id,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=settings.access_token_exp_minutes)).timestamp()),
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Dict[str, Any]:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid bearer token.")
