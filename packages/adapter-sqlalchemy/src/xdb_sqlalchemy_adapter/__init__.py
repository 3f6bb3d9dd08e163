from .adapter import SQLAlchemyCursorFactory, build_url
from .cursor import SQLAlchemyCursor

__all__ = [
    "SQLAlchemyCursorFactory",
    "SQLAlchemyCursor",
    "build_url",
]
