"""Generic repository base and query utilities for SQLAlchemy 2.x.

This module centralizes persistence-only concerns shared by all repositories:
- Safe sorting with a whitelist mapping (prevents SQL injection).
- Deterministic ordering (adds primary-key tiebreaker).
- Eager-loading hooks to prevent N+1 issues.
- No business logic and no commit/rollback; Services own transactions.

Design decisions
----------------
* Repositories MUST remain thin and persistence-focused:
  - They never implement use cases or domain policies.
  - They never call commit/rollback; Services define the Unit of Work.
* Sorting is opt-in per aggregate via ``_sortable_fields`` mapping.
* State transitions that must not race (share-code use, invite redemption)
  are single conditional ``UPDATE`` statements living in the concrete
  repositories; callers inspect the returned row instead of re-checking.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, and_, literal, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from homecooking.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


# ----------------------------- Sorting utilities -----------------------------


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Parse public sort tokens into ``(field, is_desc)`` tuples.

    :param raw: Public tokens like ``["-created_at", "code"]``.
    :type raw: Iterable[str]
    :returns: List of ``(field_name, is_desc)`` tokens.
    :rtype: list[tuple[str, bool]]
    """
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        is_desc = token.startswith("-")
        field = token[1:] if is_desc else token
        field = field.strip()
        if field:
            parsed.append((field, is_desc))
    return parsed


def apply_sorting(
    stmt: Select[Any],
    sortable_fields: Mapping[str, InstrumentedAttribute[Any]],
    tokens: Iterable[str],
    *,
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """Apply safe ``ORDER BY`` clauses based on a whitelist mapping.

    Unknown sort tokens are ignored silently. The model's primary key is always
    appended as a final ascending tiebreaker to stabilize listings.

    :param stmt: Base selectable.
    :param sortable_fields: Public field → SQLAlchemy attribute mapping.
    :param tokens: Public sort tokens (e.g., ``["-created_at"]``).
    :param pk_attr: Primary-key attribute used as a tiebreaker.
    :returns: Modified select with ``ORDER BY`` clauses.
    """
    orders: list[Any] = []
    for field, is_desc in parse_sort_tokens(tokens):
        col = sortable_fields.get(field)
        if isinstance(col, InstrumentedAttribute):
            orders.append(col.desc() if is_desc else col.asc())

    if orders:
        stmt = stmt.order_by(*orders)

    if pk_attr is not None:
        stmt = stmt.order_by(pk_attr.asc())

    return stmt


# ------------------------------ Base repository ------------------------------


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define:

    * ``model``: the SQLAlchemy mapped class.

    Subclasses MAY override:

    * ``_sortable_fields`` to expose safe sort keys.
    * ``_filterable_fields`` to enable filter whitelisting.
    * ``_default_eagerload`` to attach eager-loading options.

    This class NEVER opens, commits or rolls back transactions.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    #: Sort applied by :meth:`list` when the caller passes none.
    default_sort: tuple[str, ...] = ()

    def __init__(self, session: Session | None = None) -> None:
        """Initialise the repository with an optional SQLAlchemy session.

        When no explicit session is provided the repository falls back to the
        Flask-scoped session exposed by ``homecooking.core.extensions``.

        :param session: Session shared across the Unit of Work scope.
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session, or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        """Attach eager-loading options to generic get/list operations."""
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        """Return ``model.id`` when present."""
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        """Whitelist mapping of public sort keys to model attributes."""
        return {}

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        """Whitelist of equality-filterable fields; unknown keys are ignored."""
        return {}

    # ------------------------------ Internals --------------------------------

    def _apply_equality_filters(
        self,
        stmt: Select[Any],
        filters: Mapping[str, Any] | None,
    ) -> Select[Any]:
        """Apply whitelisted equality filters to ``stmt``."""
        if not filters:
            return stmt

        allowed = self._filterable_fields()
        clauses: list[Any] = []
        for k, v in filters.items():
            col = allowed.get(k)
            if isinstance(col, InstrumentedAttribute):
                clauses.append(col == v)
        return stmt.where(and_(*clauses)) if clauses else stmt

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity and flush to surface constraint violations early.

        :param instance: New entity instance.
        :returns: The same instance after ``flush()``.
        """
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key.

        :param entity_id: Primary-key value.
        :returns: Entity or ``None``.
        :raises RuntimeError: If no PK attribute can be detected.
        """
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        stmt = self._default_eagerload(select(self.model).where(pk_attr == entity_id))
        result = self.session.execute(stmt).scalars().first()
        return cast(E | None, result)

    def find_one(self, **filters: Any) -> E | None:
        """Find a single entity by whitelisted equality filters."""
        stmt: Select[Any] = select(self.model)
        stmt = self._apply_equality_filters(stmt, filters)
        stmt = self._default_eagerload(stmt)
        result = self.session.execute(stmt).scalars().first()
        return cast(E | None, result)

    def exists(self, **filters: Any) -> bool:
        """Return ``True`` when at least one row matches the filters."""
        stmt: Select[Any] = select(literal(1)).select_from(self.model)
        stmt = self._apply_equality_filters(stmt, filters)
        return self.session.execute(stmt.limit(1)).first() is not None

    def delete(self, instance: E) -> None:
        """Delete an entity and flush changes."""
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        """Flush pending changes to the database without committing."""
        self.session.flush()

    # ------------------------------- Listing ---------------------------------

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: Iterable[str] | None = None,
        limit: int | None = None,
    ) -> list[E]:
        """List entities with optional filtering and sorting.

        :param filters: Equality filters (public keys).
        :param sort: Public sort tokens; defaults to :attr:`default_sort`.
        :param limit: Optional limit.
        :returns: List of entities.
        """
        stmt: Select[Any] = select(self.model)
        stmt = self._apply_equality_filters(stmt, filters)
        stmt = self._default_eagerload(stmt)
        tokens = list(sort) if sort is not None else list(self.default_sort)
        stmt = apply_sorting(stmt, self._sortable_fields(), tokens, pk_attr=self._pk_attr())

        if limit is not None:
            stmt = stmt.limit(int(limit))

        results = self.session.execute(stmt).scalars().unique().all()
        return cast(list[E], list(results))
