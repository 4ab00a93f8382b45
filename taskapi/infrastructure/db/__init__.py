# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .session import ENGINE, Base, SessionLocal, drop_db, init_db

__all__ = ["Base", "ENGINE", "SessionLocal", "drop_db", "init_db"]
