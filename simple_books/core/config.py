from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    # 대상 서비스 (live 기본값, 로컬 stub 은 http://127.0.0.1:8000)
    base_url: str = Field(default="https://simple-books-api.glitch.me")
    timeout: float = Field(default=10.0)

    # 로깅
    log_level: str = Field(default="INFO")
    log_bodies: bool = Field(default=True)

    # live 테스트 모듈 활성화 여부 (SIMPLE_BOOKS_LIVE=1)
    live: bool = Field(default=False)

    # stub 서비스 설정
    database_url: Optional[str] = Field(default="sqlite://")
    secret_key: str = Field(default="CHANGE_ME_SECRET")
    access_token_exp_minutes: int = Field(default=7 * 24 * 60)
    jwt_algorithm: str = Field(default="HS256")

    model_config = SettingsConfigDict(
        env_prefix="SIMPLE_BOOKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
