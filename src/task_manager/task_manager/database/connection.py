from __future__ import annotations

import logging
from dataclasses import dataclass

import mysql.connector
from mysql.connector import errors as mysql_errors

from ..core.constants import DEFAULT_DB_PORT
from ..core.enums import ConnectionState
from ..core.exceptions import PersistenceUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 30

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", DEFAULT_DB_PORT)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "task_manager")),
            connect_timeout=int(db_config.get("connect_timeout", 30)),
        )


class DatabaseConnection:
    """Explicitly constructed DB handle passed to every repository.

    Note: We create short-lived connections per operation. ``open`` checks
    reachability once at startup, ``close`` marks the handle unusable.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._state = ConnectionState.DISCONNECTED
        self._opened = False

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def config(self) -> DBConfig:
        return self._config

    def open(self) -> None:
        self._state = ConnectionState.CONNECTING
        try:
            conn = self._raw_connect()
        except mysql_errors.Error as e:
            self._state = ConnectionState.DISCONNECTED
            logger.error("database unreachable at %s:%s: %s", self._config.host, self._config.port, e)
            raise PersistenceUnavailable(f"Database unreachable: {e}") from e
        conn.close()
        self._opened = True
        self._state = ConnectionState.CONNECTED
        logger.info(
            "connected to %s@%s:%s/%s",
            self._config.user,
            self._config.host,
            self._config.port,
            self._config.database,
        )

    def close(self) -> None:
        if not self._opened:
            return
        self._opened = False
        self._state = ConnectionState.DISCONNECTED
        logger.info("database handle closed")

    def connect(self):
        """New connection for one operation; ``state`` follows the outcome."""

        if not self._opened:
            raise PersistenceUnavailable("Database handle is not open")
        try:
            conn = self._raw_connect()
        except (mysql_errors.InterfaceError, mysql_errors.OperationalError) as e:
            if self._state == ConnectionState.CONNECTED:
                logger.warning("database connection lost: %s", e)
            self._state = ConnectionState.DISCONNECTED
            raise PersistenceUnavailable(f"Database unavailable: {e}") from e
        if self._state != ConnectionState.CONNECTED:
            logger.info("database connection restored")
            self._state = ConnectionState.CONNECTED
        return conn

    def refresh_state(self) -> ConnectionState:
        """Try one connection so ``state`` reflects the database right now."""

        if self._opened:
            try:
                self.connect().close()
            except PersistenceUnavailable:
                pass  # connect() already recorded DISCONNECTED
        return self._state

    def _raw_connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=self._config.connect_timeout,
        )
