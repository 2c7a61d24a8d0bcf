"""
app/db/session.py
Engine, session factory and one-time schema setup
"""
import threading

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.core.logging import logger


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


_initialized_engines: dict = {}
_init_lock = threading.Lock()


def init_models(bind: Engine) -> bool:
    """
    Create all tables for ``bind`` at most once per process.

    Returns True only for the call that actually ran create_all.
    """
    from app.db.base import Base

    key = id(bind)
    with _init_lock:
        if key in _initialized_engines:
            return False
        Base.metadata.create_all(bind=bind)
        _initialized_engines[key] = bind

    logger.info("Database tables ensured for %s", bind.url.render_as_string(hide_password=True))
    return True


def reset_model_registry() -> None:
    """Forget which engines were initialized (tests drop tables between runs)"""
    with _init_lock:
        _initialized_engines.clear()
