"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from contextlib import suppress

from flask import current_app
from sqlalchemy import event, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction, scoped_session

from homecooking.core.extensions import db
from homecooking.repositories import (
    RecipeRepository,
    ShareCodeRepository,
    UserInviteRepository,
    UserRepository,
)
from homecooking.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.recipes = RecipeRepository(session=self.session)
        self.share_codes = ShareCodeRepository(session=self.session)
        self.invites = UserInviteRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories for a consistent
    transaction: commit on clean exit, rollback when the block raises.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # No-op: the session is lazily started on the first statement.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:
    - Owns a fresh transaction when the session is idle, otherwise attaches to
      the running one (outer request or test fixture) and leaves it untouched.
    - On PostgreSQL/MySQL applies ``SET TRANSACTION ISOLATION LEVEL`` and
      ``SET TRANSACTION READ ONLY`` to an owned transaction.
    - Installs write-guards (ORM flush + raw DML) for the whole scope.
    - Disallows ``commit()``; an owned transaction is always rolled back.

    Callers must map ORM rows to DTOs *inside* the ``with`` block; rows are
    expired once an owned transaction is rolled back.
    """

    _WRITE_PREFIXES = (
        "insert",
        "update",
        "delete",
        "merge",
        "alter",
        "drop",
        "truncate",
        "create",
        "replace",
        "grant",
        "revoke",
    )
    _SET_TRANSACTION_DIALECTS = ("postgresql", "mysql", "mariadb")

    def __init__(
        self,
        *,
        isolation_level: str | None = "READ COMMITTED",
        enforce_db_readonly: bool = True,
    ) -> None:
        super().__init__(session=db.session)
        self.isolation_level = isolation_level
        self.enforce_db_readonly = enforce_db_readonly

        self._conn: Connection | None = None
        self._txn: SessionTransaction | None = None
        self._listeners_installed = False

    # ----------------------------- Context Manager -----------------------------

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self._txn = None
        try:
            self._txn = self.session.begin()
        except InvalidRequestError:
            # Already inside a transaction: attach, keep its capabilities.
            pass

        self._conn = self.session.connection()
        self._install_listeners()

        if self._txn is not None and self._conn.dialect.name in self._SET_TRANSACTION_DIALECTS:
            self._apply_transaction_directives()

        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._txn is not None:
                with suppress(SQLAlchemyError):
                    self._txn.rollback()
                self._txn = None
        finally:
            self._remove_listeners()
            self._conn = None

    # ----------------------------- Public API ---------------------------------

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        """Rollback the current transaction if active."""
        self.session.rollback()

    # ----------------------------- Internals ----------------------------------

    def _apply_transaction_directives(self) -> None:
        try:
            if self.isolation_level:
                iso = self.isolation_level.upper().strip()
                if iso not in (
                    "READ COMMITTED",
                    "REPEATABLE READ",
                    "SERIALIZABLE",
                    "READ UNCOMMITTED",
                ):
                    current_app.logger.warning(
                        "Unknown isolation_level '%s'; attempting as-is.", iso
                    )
                self.session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {iso}"))
            if self.enforce_db_readonly:
                self.session.execute(text("SET TRANSACTION READ ONLY"))
        except SQLAlchemyError as exc:
            current_app.logger.warning(
                "SET TRANSACTION directives failed (%s). Falling back to guards-only.", exc
            )

    def _orm_session(self) -> Session:
        """Return the concrete Session so guards never attach to the Session class."""
        if isinstance(self.session, scoped_session):
            return self.session()
        return self.session

    def _install_listeners(self) -> None:
        """Install ORM/db-level listeners to prevent any write attempt."""
        if self._listeners_installed:
            return

        def _before_flush(session, flush_context, instances):
            if session.new or session.dirty or session.deleted:
                raise RuntimeError(
                    "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
                )

        def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            first_token = statement.lstrip().split(None, 1)[0].lower() if statement else ""
            if first_token.startswith(self._WRITE_PREFIXES):
                raise RuntimeError(
                    f"Read-only UnitOfWork: SQL statement blocked: {first_token.upper()}"
                )

        event.listen(self._orm_session(), "before_flush", _before_flush)
        target = self._conn if self._conn is not None else self.session.get_bind()
        event.listen(target, "before_cursor_execute", _before_cursor_execute)

        self._ro__before_flush = _before_flush
        self._ro__before_cursor_execute = _before_cursor_execute
        self._listeners_installed = True

    def _remove_listeners(self) -> None:
        """Detach previously installed listeners."""
        if not self._listeners_installed:
            return

        with suppress(InvalidRequestError):
            event.remove(self._orm_session(), "before_flush", self._ro__before_flush)

        with suppress(InvalidRequestError):
            target = self._conn if self._conn is not None else self.session.get_bind()
            event.remove(target, "before_cursor_execute", self._ro__before_cursor_execute)

        self._listeners_installed = False
