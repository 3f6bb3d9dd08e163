import sqlite3

import pytest
from fastapi.testclient import TestClient

from xdb import XDBInterpreter
from xdb_api.container import Container
from xdb_api.main import create_app
from xdb_sqlalchemy_adapter import SQLAlchemyCursorFactory


@pytest.fixture()
def sqlite_url(tmp_path):
    db_path = tmp_path / "api.db"
    conn = sqlite3.connect(db_path)
    try:
        conn.execute("CREATE TABLE agg (seq INTEGER, g TEXT, cnt INTEGER, n INTEGER, total INTEGER, rel TEXT)")
        conn.executemany(
            "INSERT INTO agg VALUES (?, ?, ?, ?, ?, ?)",
            [(1, "east", 10, 100, 1000, "0.2"), (2, "west", 12, 100, 1500, "0.1")],
        )
        conn.commit()
    finally:
        conn.close()
    return f"sqlite:///{db_path}"


@pytest.fixture()
def client(sqlite_url):
    interpreter = XDBInterpreter(SQLAlchemyCursorFactory(url=sqlite_url))
    app = create_app(Container(interpreter=interpreter))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def statement():
    return 'SELECT g, cnt, n, total AS "sum", rel AS "rel. CI" FROM agg ORDER BY seq'
