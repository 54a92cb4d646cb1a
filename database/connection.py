# database/connection.py
import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from config.settings import settings
from database.base import Base

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    kwargs = {"connect_args": {"check_same_thread": False}}
    # in-memory sqlite: every connection must share the one database
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(DATABASE_URL, echo=settings.SQL_ECHO, **_engine_kwargs(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ---------- session ----------
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ---------- bootstrap ----------
def import_models() -> None:
    # models must be imported before create_all / drop_all
    from modules.security import model as _sec_model  # noqa: F401
    from modules.directory import models as _dir_models  # noqa: F401
    from modules.time_off import models as _to_models  # noqa: F401
    from modules.databases import models as _db_models  # noqa: F401


def create_all_tables() -> None:
    import_models()
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured (%s)", engine.url.render_as_string(hide_password=True))


def drop_all_tables() -> None:
    import_models()
    Base.metadata.drop_all(bind=engine)
