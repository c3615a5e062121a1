"""Process-wide database connection cache.

Django opens connections lazily per thread; this module keeps one
process-wide record of whether the database has been reached, so request
handlers can fail fast with a PersistenceError before touching the stores.
"""

import logging
import threading

from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections

from events.domain.errors import PersistenceError

logger = logging.getLogger(__name__)

CONNECTED = "connected"
CONNECTING = "connecting"
DISCONNECTED = "disconnected"


class DatabaseConnection:
    """Lazily established database connection shared by every request.

    Concurrent first calls to ``connect`` wait for the same attempt instead of
    opening their own. A failed attempt is forgotten so the next call retries.
    """

    def __init__(self, alias: str = DEFAULT_DB_ALIAS) -> None:
        self._alias = alias
        self._lock = threading.Lock()
        self._connected = False
        self._connecting = False

    def connect(self) -> None:
        if self._connected:
            return
        with self._lock:
            if self._connected:
                return
            self._connecting = True
            try:
                connections[self._alias].ensure_connection()
            except DatabaseError as exc:
                logger.error(f"Database connection failed: {exc}")
                raise PersistenceError(f"Database connection failed: {exc}") from exc
            finally:
                self._connecting = False
            self._connected = True
            logger.info(f"Database '{self._alias}' connected")

    def disconnect(self) -> None:
        with self._lock:
            try:
                connections.close_all()
            except DatabaseError as exc:
                logger.error(f"Error disconnecting from database: {exc}")
                raise PersistenceError(f"Database disconnect failed: {exc}") from exc
            finally:
                self._connected = False
            logger.info(f"Database '{self._alias}' disconnected")

    def is_connected(self) -> bool:
        return self._connected

    def state(self) -> str:
        if self._connecting:
            return CONNECTING
        return CONNECTED if self._connected else DISCONNECTED


database = DatabaseConnection()
