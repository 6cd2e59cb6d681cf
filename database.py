import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.engine.url import URL, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config import get_db_url, normalize_db_url, settings

logger = logging.getLogger(__name__)


def _engine_url() -> URL:
    url_obj = make_url(normalize_db_url(get_db_url(settings)))
    if url_obj.drivername.startswith("mysql"):
        # QR payloads may carry emoji.
        url_obj = url_obj.update_query_dict({"charset": url_obj.query.get("charset", "utf8mb4")})
    return url_obj


def _connect_args(url_obj: URL) -> dict:
    if url_obj.drivername.startswith("sqlite"):
        # FastAPI runs sync dependencies in a threadpool.
        return {"check_same_thread": False}
    ca_path = os.getenv("DB_SSL_CA")
    if url_obj.drivername.startswith("mysql") and ca_path:
        return {"ssl": {"ca": ca_path}}
    return {}


url_obj = _engine_url()
DATABASE_URL = url_obj.render_as_string(hide_password=False)
logger.info("Connecting DB with URL: %s", url_obj.render_as_string(hide_password=True))

engine = create_engine(DATABASE_URL, echo=False, future=True, connect_args=_connect_args(url_obj), pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
