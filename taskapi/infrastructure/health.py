# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time

from sqlalchemy import text
from sqlalchemy.engine import Engine

from taskapi.infrastructure.db import ENGINE


def check_database(engine: Engine = ENGINE) -> float:
    """Round-trip a trivial query; returns the latency in milliseconds."""

    started = time.perf_counter()
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    return (time.perf_counter() - started) * 1000


__all__ = ["check_database"]
