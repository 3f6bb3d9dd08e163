from typing import Any, Dict, Optional, Union

from sqlalchemy import create_engine, text, Engine, URL
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from xdb.common.errors import CursorError
from xdb.common.settings import Settings
from .cursor import SQLAlchemyCursor

import logging
logger = logging.getLogger(__name__)


def build_url(settings: Settings) -> URL:
    """Combines the configured URL, driver and credentials into a SQLAlchemy URL."""
    url = make_url(settings.postgresql_url)
    if settings.postgresql_driver and "+" not in url.drivername:
        url = url.set(drivername=f"{url.drivername}+{settings.postgresql_driver}")
    if not url.username and settings.postgresql_user:
        url = url.set(username=settings.postgresql_user)
    if url.password is None and settings.postgresql_password:
        url = url.set(password=settings.postgresql_password)
    return url


class SQLAlchemyCursorFactory:
    """
    Opens streaming cursors against any SQLAlchemy-supported database.
    Each statement runs on its own connection, inside a transaction that is
    committed once the session releases its cursor.
    """
    def __init__(
        self,
        url: Union[str, URL, None] = None,
        read_only: bool = True,
        connect_args: Optional[Dict[str, Any]] = None,
    ):
        self.url = url
        self.read_only = read_only
        self.connect_args = connect_args or {}
        self.engine: Optional[Engine] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "SQLAlchemyCursorFactory":
        return cls(url=build_url(settings), read_only=settings.read_only)

    def __str__(self):
        if self.url is None:
            return "<unconfigured>"
        return make_url(self.url).render_as_string(hide_password=True)

    def connect(self) -> None:
        if not self.url:
            raise CursorError(f"Connection URL is required for {self}")
        try:
            self.engine = create_engine(self.url, pool_pre_ping=True, connect_args=self.connect_args)
            # fail at open time rather than on the first poll
            with self.engine.connect():
                pass
        except (SQLAlchemyError, ImportError) as e:
            logger.error(f"Failed to connect to database {self}: {e}")
            self.close()
            raise CursorError(f"Cannot connect to {self}: {e}") from e

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None

    def open_query(self, statement: str, fetch_size: int = 1) -> SQLAlchemyCursor:
        if not self.engine:
            raise CursorError(f"Not connected to {self}")

        options: Dict[str, Any] = {"stream_results": True, "max_row_buffer": fetch_size}
        if self.read_only and self.engine.dialect.name == "postgresql":
            options["postgresql_readonly"] = True

        connection = None
        try:
            connection = self.engine.connect().execution_options(**options)
            result = connection.execute(text(statement))
        except SQLAlchemyError as e:
            if connection is not None:
                connection.close()
            raise CursorError(f"Failed to execute statement: {e}") from e
        return SQLAlchemyCursor(connection, result)
