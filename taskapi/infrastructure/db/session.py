# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from taskapi.shared.config import load_config
from taskapi.shared.logging import logger

_config = load_config()


class Base(DeclarativeBase):
    pass


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/") == "sqlite:")


def _engine_options(url: str) -> dict[str, Any]:
    if _is_memory_sqlite(url):
        # every connection must see the same in-memory database
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }

    options: dict[str, Any] = {
        "pool_pre_ping": True,
        "pool_size": _config.database.pool_size,
        "max_overflow": _config.database.max_overflow,
        "pool_timeout": _config.database.pool_timeout,
    }
    if url.startswith("sqlite"):
        options["connect_args"] = {
            "check_same_thread": False,
            "timeout": int(_config.database.pool_timeout),
        }
    return options


ENGINE: Engine = create_engine(
    _config.database.url,
    echo=False,
    **_engine_options(_config.database.url),
)


SessionLocal = scoped_session(
    sessionmaker(bind=ENGINE, autoflush=False, autocommit=False, expire_on_commit=False)
)


def init_db() -> None:
    # registers the mapped tables on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=ENGINE)
    logger.info("Database schema ensured")


def drop_db() -> None:
    from . import models  # noqa: F401

    Base.metadata.drop_all(bind=ENGINE)
    logger.info("Database schema dropped")
