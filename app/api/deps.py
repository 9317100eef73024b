from fastapi import Depends, Header

from app.config import Settings, get_settings
from app.domain.errors import ValidationError
from app.domain.labels import Language
from app.infrastructure.db.engine import build_engine, build_sessionmaker

settings = get_settings()

# Without DATABASE_URL the app falls back to an in-memory SQLite (dev/test)
engine = build_engine(settings)
AsyncSessionLocal = build_sessionmaker(engine)


def get_current_user_id(
    user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str:
    """Identity is resolved upstream; the gateway forwards it in X-User-Id."""
    if not user_id or not user_id.strip():
        raise ValidationError("X-User-Id", "header is required")
    return user_id.strip()


def get_language(
    accept_language: str | None = Header(default=None, alias="Accept-Language"),
    settings: Settings = Depends(get_settings),
) -> Language:
    default = Language.parse(settings.default_language)
    return Language.parse(accept_language, default=default)
