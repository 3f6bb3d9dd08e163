from typing import Optional

from xdb import XDBInterpreter
from xdb.common.settings import Settings, settings as default_settings
from xdb_sqlalchemy_adapter import SQLAlchemyCursorFactory

from xdb_api.services import HealthService, SessionService


class Container:
    def __init__(self, interpreter: Optional[XDBInterpreter] = None, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.interpreter = interpreter or self._create_interpreter()
        self.sessions = SessionService(self.interpreter)
        self.health = HealthService(self.interpreter)

    def _create_interpreter(self) -> XDBInterpreter:
        factory = SQLAlchemyCursorFactory.from_settings(self.settings)
        return XDBInterpreter(factory, fetch_size=self.settings.fetch_size)

    def open(self) -> None:
        self.interpreter.open()

    def close(self) -> None:
        self.interpreter.close()
