from typing import Generator

import structlog
from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = structlog.get_logger(__name__)

Base = declarative_base()

def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

def create_db_engine(url: str) -> Engine:
    """Create an engine, turning on FK enforcement for SQLite"""
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)
    
    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every session sees an empty database
        kwargs["poolclass"] = StaticPool
    
    engine = create_engine(url, **kwargs)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine

class Database:
    """Owns the engine and session factory for the lifetime of the app"""
    
    def __init__(self, url: str):
        self.url = url
        self.engine = create_db_engine(url)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
    
    def create_all(self):
        # models must be imported so their tables are registered on Base
        from bustrips import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)
    
    def session(self) -> Session:
        return self.session_factory()
    
    def dispose(self):
        self.engine.dispose()
        logger.info("database_disposed", dialect=self.engine.dialect.name)

def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a session bound to the app's database handle"""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
