import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from docchat.config.settings import Settings
from docchat.database.connection import close_pool, get_connection, init_pool

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "docchat" / "database" / "sql" / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docchat_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def seed_chat(db_conn: psycopg.Connection[Any]) -> Generator[str, None, None]:
    with db_conn.cursor() as cur:
        cur.execute("INSERT INTO chats DEFAULT VALUES RETURNING id")
        row = cur.fetchone()
        assert row is not None
        chat_id = str(row[0])
    db_conn.commit()
    try:
        yield chat_id
    finally:
        with db_conn.cursor() as cur:
            cur.execute("DELETE FROM chats WHERE id = %s", (chat_id,))
        db_conn.commit()
