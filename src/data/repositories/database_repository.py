from __future__ import annotations

"""Database repository providing common database operations."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
import logging
import time
import pandas as pd

from backend.connection_manager import execute_statement, get_db_connection
from config.database import DatabaseConfig
from config.settings import Settings
from core.exceptions import QueryExecutionError

Row = Dict[str, Any]


def dataframe_to_records(df: pd.DataFrame) -> List[Row]:
    """Convert result rows to plain dicts, with SQL NULLs as None."""
    if df.empty:
        return []
    return df.astype(object).where(pd.notna(df), None).to_dict(orient="records")


class DatabaseRepository:
    """Encapsulates DuckDB access patterns.

    Subclasses go through fetch_one / fetch_all, which log executor failures
    and return None / [] instead of raising.
    """

    def __init__(self, db_path: Optional[Path] = None, logger_obj: Optional[logging.Logger] = None) -> None:
        self.db_path = Settings.get_db_path(db_path)
        self.logger = logger_obj or logging.getLogger(__name__)

    # ----------------------- Query Execution -----------------------
    def execute_query(
        self,
        statement: str,
        params: Optional[Sequence[Any]] = None,
        read_only: bool = True,
    ) -> pd.DataFrame:
        """Execute a parameterized statement with timing. Raises QueryExecutionError."""
        with get_db_connection(self.db_path, read_only=read_only, logger_obj=self.logger) as conn:
            start = time.perf_counter()
            result = execute_statement(conn, statement, params, self.logger)
            duration = time.perf_counter() - start
            self.logger.info("Query executed in %.3f sec, %d row(s)", duration, len(result))
            return result

    def fetch_one(
        self,
        statement: str,
        params: Optional[Sequence[Any]] = None,
        read_only: bool = True,
    ) -> Optional[Row]:
        """Return the first row, or None when there is none or the query fails."""
        try:
            rows = dataframe_to_records(self.execute_query(statement, params, read_only))
        except QueryExecutionError as e:
            self.logger.error(f"Error executing query: {e}", exc_info=True)
            return None
        return rows[0] if rows else None

    def fetch_all(
        self,
        statement: str,
        params: Optional[Sequence[Any]] = None,
        read_only: bool = True,
    ) -> List[Row]:
        """Return all rows, or [] when the query fails."""
        try:
            return dataframe_to_records(self.execute_query(statement, params, read_only))
        except QueryExecutionError as e:
            self.logger.error(f"Error executing query: {e}", exc_info=True)
            return []

    # --------------------------- Tables ---------------------------
    def table_exists(self, table_name: str) -> bool:
        """Check if a table exists in the database."""
        sql = "SELECT COUNT(*) AS table_count FROM duckdb_tables() WHERE table_name = $1"
        row = self.fetch_one(sql, [table_name])
        return bool(row and row["table_count"] > 0)

    def get_table_count(self, table_name: str) -> int:
        """Return the number of rows in one of the LightBnB tables."""
        if not DatabaseConfig.is_known_table(table_name):
            raise ValueError(f"Unknown table: {table_name}")
        row = self.fetch_one(f'SELECT COUNT(*) AS row_count FROM "{table_name}"')
        return int(row["row_count"]) if row else 0
