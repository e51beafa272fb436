"""Async SQLAlchemy engine, declarative base and session factory."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from fieldops.config import settings


class Base(DeclarativeBase):
    pass


def _connect_args(database_url: str) -> dict:
    # Per-statement timeout is enforced by the driver
    if "+asyncpg" in database_url:
        return {"command_timeout": settings.db_command_timeout}
    return {}


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.database_url),
)

async_session_factory = async_sessionmaker(engine, expire_on_commit=False)
