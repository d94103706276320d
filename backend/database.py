# backend/database.py
import logging
import time

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import settings

logger = logging.getLogger(__name__)

SQLALCHEMY_DATABASE_URL = settings.database_url

def engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live on a single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return kwargs

    connect_args = {}
    if url.startswith("mysql+mysqlconnector"):
        connect_args["connection_timeout"] = settings.DB_CONNECT_TIMEOUT
    return {
        "connect_args": connect_args,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": 0,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_pre_ping": True,
    }

engine = create_engine(SQLALCHEMY_DATABASE_URL, **engine_options(SQLALCHEMY_DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def _create_database_if_missing():
    url = make_url(SQLALCHEMY_DATABASE_URL)
    if url.get_backend_name() != "mysql" or not url.database:
        return
    server_engine = create_engine(url.set(database=None), **engine_options(SQLALCHEMY_DATABASE_URL))
    try:
        with server_engine.connect() as conn:
            logger.info("Connected to MySQL server, creating database %s if not exists", url.database)
            conn.execute(text(f"CREATE DATABASE IF NOT EXISTS `{url.database}`"))
            conn.commit()
    finally:
        server_engine.dispose()

def init_db(retries: int = None, delay: float = None):
    """Create the database (MySQL) and all tables, retrying the initial connection."""
    # Registers every model on Base.metadata
    import models  # noqa: F401

    retries = settings.DB_CONNECT_RETRIES if retries is None else retries
    delay = settings.DB_RETRY_DELAY if delay is None else delay

    while True:
        try:
            logger.info("Attempting database connection (%d retries left)...", retries)
            _create_database_if_missing()
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            Base.metadata.create_all(bind=engine)
            logger.info("Database initialization completed successfully")
            return
        except Exception as e:
            retries -= 1
            logger.error("Database connection attempt failed (%d retries left): %s", retries, e)
            if retries <= 0:
                logger.error("All database connection attempts failed")
                raise
            time.sleep(delay)
