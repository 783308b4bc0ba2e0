# database.py

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Base class for our database models
Base = declarative_base()


def make_engine(database_url: str):
    """Create the engine; in-memory SQLite shares one connection across threads."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def make_session_factory(engine):
    # expire_on_commit=False keeps returned Job rows readable after the session closes
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


# Dependency for FastAPI to get the job store created in the app lifespan
def get_store(request: Request):
    return request.app.state.store
