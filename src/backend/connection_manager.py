"""
Database connection management with proper resource cleanup and monitoring.

Provides the connection context manager and the statement executor used by
the repositories. Connection acquisition failures and rejected statements
surface as QueryExecutionError; nothing here retries or falls back.
"""

from __future__ import annotations

import contextlib
import logging
import threading
import time
import weakref
from pathlib import Path
from typing import Any, Generator, Optional, Sequence

import duckdb
import pandas as pd

from config.database import DatabaseConfig
from core.exceptions import QueryExecutionError


class ConnectionMonitor:
    """Monitors database connection lifecycle to detect leaks."""

    def __init__(self):
        self._active_connections: dict[int, dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def register_connection(
        self, conn: duckdb.DuckDBPyConnection, db_path: str
    ) -> None:
        """Register a new connection for monitoring."""
        with self._lock:
            conn_id = id(conn)
            self._active_connections[conn_id] = {
                "db_path": db_path,
                "created_at": time.time(),
                "thread_id": threading.get_ident(),
                "weakref": weakref.ref(conn, self._connection_finalized),
            }
            self._logger.debug(f"Registered connection {conn_id} to {db_path}")

    def unregister_connection(self, conn: duckdb.DuckDBPyConnection) -> None:
        """Unregister a connection when properly closed."""
        with self._lock:
            conn_id = id(conn)
            if conn_id in self._active_connections:
                db_path = self._active_connections[conn_id]["db_path"]
                del self._active_connections[conn_id]
                self._logger.debug(f"Unregistered connection {conn_id} to {db_path}")

    def _connection_finalized(self, weakref_obj) -> None:
        """Called when a connection is garbage collected without proper cleanup."""
        with self._lock:
            for conn_id, info in list(self._active_connections.items()):
                if info["weakref"] is weakref_obj:
                    self._logger.warning(
                        f"Connection {conn_id} to {info['db_path']} was garbage collected without explicit close()"
                    )
                    del self._active_connections[conn_id]
                    break

    def get_active_connections(self) -> dict[int, dict[str, Any]]:
        """Get information about currently active connections."""
        with self._lock:
            return dict(self._active_connections)

    def log_connection_stats(self) -> None:
        """Log current connection statistics."""
        stats = self.get_active_connections()
        if stats:
            self._logger.warning(f"Active connections: {len(stats)}")
            for conn_id, info in stats.items():
                age = time.time() - info["created_at"]
                self._logger.warning(
                    f"  Connection {conn_id}: {info['db_path']}, age: {age:.1f}s, thread: {info['thread_id']}"
                )
        else:
            self._logger.debug("No active connections")


# Global connection monitor instance
_connection_monitor = ConnectionMonitor()


@contextlib.contextmanager
def get_db_connection(
    db_path: Path,
    read_only: bool = DatabaseConfig.READ_ONLY_DEFAULT,
    logger_obj: logging.Logger | None = None,
) -> Generator[duckdb.DuckDBPyConnection, None, None]:
    """
    Context manager for DuckDB connections with proper resource cleanup.

    Args:
        db_path: Path to the database file
        read_only: Whether to open in read-only mode
        logger_obj: Optional logger for debug messages

    Yields:
        DuckDB connection that will be automatically closed

    Raises:
        QueryExecutionError: If the database cannot be opened

    Example:
        with get_db_connection(db_path) as conn:
            df = execute_statement(conn, "SELECT * FROM users WHERE id = $1", [1])
    """
    if logger_obj is None:
        logger_obj = logging.getLogger(__name__)

    if not db_path.exists() and read_only:
        raise QueryExecutionError(f"Database {db_path} does not exist")

    try:
        conn = duckdb.connect(database=db_path.as_posix(), read_only=read_only)
    except duckdb.Error as e:
        raise QueryExecutionError(f"Error connecting to database at {db_path}: {e}") from e

    _connection_monitor.register_connection(conn, str(db_path))
    logger_obj.debug(f"Connected to DuckDB at {db_path} (read_only={read_only})")
    try:
        yield conn
    finally:
        _connection_monitor.unregister_connection(conn)
        conn.close()
        logger_obj.debug(f"Connection to {db_path} closed successfully")


def execute_statement(
    conn: duckdb.DuckDBPyConnection,
    statement: str,
    params: Optional[Sequence[Any]] = None,
    logger_obj: logging.Logger | None = None,
) -> pd.DataFrame:
    """
    Execute a parameterized statement and return its rows.

    Args:
        conn: DuckDB connection
        statement: SQL with $n placeholders
        params: Values for the placeholders, in order
        logger_obj: Optional logger for debug messages

    Returns:
        Result rows as a dataframe

    Raises:
        QueryExecutionError: If the store rejects the statement
    """
    if logger_obj is None:
        logger_obj = logging.getLogger(__name__)

    try:
        if params:
            logger_obj.debug(f"Executing query: {statement[:200]}... with params: {list(params)}")
            return conn.execute(statement, list(params)).df()
        logger_obj.debug(f"Executing query: {statement[:200]}...")
        return conn.execute(statement).df()
    except duckdb.Error as e:
        raise QueryExecutionError(f"Query execution error: {e}", statement, params) from e


def get_connection_stats() -> dict[str, Any]:
    """Get current connection monitoring statistics."""
    active_conns = _connection_monitor.get_active_connections()
    return {"active_count": len(active_conns), "connections": active_conns}


def log_connection_leaks() -> None:
    """Log any potential connection leaks for debugging."""
    _connection_monitor.log_connection_stats()
