# ============================================================================
# CLAUDE CONTEXT - POSTGRESQL REPOSITORY
# ============================================================================
# STATUS: Core Infrastructure - PostgreSQL connection management
# PURPOSE: Read-only PostGIS access shared by the layer repository and health checks
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: PostgreSQLRepository
# DEPENDENCIES: psycopg, config
# SCOPE: Read-only database operations for API serving
# PATTERNS: Repository pattern, Per-request connections
# ============================================================================

"""
PostgreSQL Repository - Read-Only Database Access

Provides PostgreSQL connection management with:
- Per-request connection creation (no pooling)
- dict_row results for column-name access
- Safe SQL execution with psycopg.sql composition
- Optional per-query statement timeout
- Table existence checks

Usage:
    from infrastructure.postgresql import PostgreSQLRepository

    repo = PostgreSQLRepository(schema_name='public')
    with repo._get_cursor() as cursor:
        cursor.execute("SELECT id, kecamatan FROM public.kecamatan")
        rows = cursor.fetchall()
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from config import get_postgres_connection_string

logger = logging.getLogger(__name__)


class PostgreSQLRepository:
    """
    PostgreSQL repository base class with connection management.

    Connection Strategy:
    -------------------
    Each operation opens a NEW connection and closes it right after use.
    Azure Functions instances are short-lived, so no pool is kept.

    Nothing touches the database in __init__; the first query opens the
    first connection.
    """

    def __init__(self, connection_string: Optional[str] = None,
                 schema_name: str = 'public',
                 statement_timeout_seconds: Optional[int] = None):
        """
        Initialize PostgreSQL repository.

        Parameters:
        ----------
        connection_string : Optional[str]
            Explicit PostgreSQL connection string. If not provided,
            uses get_postgres_connection_string() from config module.

        schema_name : str
            Schema holding the surveillance tables.

        statement_timeout_seconds : Optional[int]
            When set, every query runs under SET statement_timeout.
        """
        self.schema_name = schema_name
        self.statement_timeout_seconds = statement_timeout_seconds
        self._conn_string = connection_string

    @property
    def conn_string(self) -> str:
        """Connection string, resolved from config on first use."""
        if self._conn_string is None:
            self._conn_string = get_postgres_connection_string()
        return self._conn_string

    @contextmanager
    def _get_connection(self):
        """
        Context manager for PostgreSQL database connections.

        Yields:
        ------
        psycopg.Connection
            Active connection with dict_row factory. Autocommit is OFF.

        Raises:
        ------
        psycopg.Error
            On connection failures (network, auth, etc.)
        """
        conn = None
        try:
            logger.debug(f"🔗 Opening PostgreSQL connection (schema: {self.schema_name})")
            conn = psycopg.connect(self.conn_string, row_factory=dict_row)
            yield conn

        except psycopg.Error as e:
            logger.error(f"❌ PostgreSQL error ({type(e).__name__}): {e}")
            if conn is not None and not conn.closed:
                conn.rollback()
            raise

        finally:
            if conn is not None:
                conn.close()
                logger.debug("🔒 Connection closed")

    @contextmanager
    def _get_cursor(self):
        """
        Context manager for a cursor on a fresh connection, committed on success.
        """
        with self._get_connection() as conn:
            with conn.cursor() as cursor:
                yield cursor
            conn.commit()

    def _apply_statement_timeout(self, cursor) -> None:
        """Set statement_timeout for the current session if configured."""
        if self.statement_timeout_seconds:
            cursor.execute(
                sql.SQL("SET statement_timeout = {}").format(
                    sql.Literal(f"{int(self.statement_timeout_seconds)}s")
                )
            )

    def _fetch_all(self, query: sql.Composable,
                   params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """
        Run a read query and return every row as a dict.

        Parameters:
        ----------
        query : sql.Composable
            Query built with psycopg.sql composition.

        params : Optional[Sequence]
            Values for %s placeholders.

        Raises:
        ------
        TypeError
            If query is a plain string (composition is required)

        RuntimeError
            For any database failure
        """
        if not isinstance(query, sql.Composable):
            raise TypeError(f"Query must be psycopg.sql.Composable, got {type(query)}")

        try:
            with self._get_cursor() as cursor:
                self._apply_statement_timeout(cursor)
                cursor.execute(query, params)
                rows = cursor.fetchall()
                logger.debug(f"✅ Query returned {len(rows)} rows")
                return rows

        except psycopg.Error as e:
            logger.error(f"❌ Query execution failed: {e}")
            raise RuntimeError(f"Database query failed: {e}") from e

    def _table_exists(self, table_name: str) -> bool:
        """
        Check if a table exists in the configured schema.

        Parameters:
        ----------
        table_name : str
            Name of the table (without schema prefix)

        Returns:
        -------
        bool
            True if the table exists, False otherwise or on error
        """
        try:
            with self._get_cursor() as cursor:
                cursor.execute("""
                    SELECT EXISTS (
                        SELECT FROM information_schema.tables
                        WHERE table_schema = %s
                        AND table_name = %s
                    ) AS exists
                """, (self.schema_name, table_name))
                result = cursor.fetchone()
                return result['exists'] if result else False
        except psycopg.Error as e:
            logger.error(f"Error checking table existence for '{table_name}': {e}")
            return False
