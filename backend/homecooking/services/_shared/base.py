# homecooking/services/_shared/base.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from http import HTTPStatus

from homecooking.core import errors as api_errors
from homecooking.services._shared.clock import utcnow
from homecooking.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExpiredError,
    MaxUsesReachedError,
    NotFoundError,
    ServiceError,
)
from homecooking.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (auth, request ids, etc.).

    :param actor_id: Authenticated user identifier.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: uuid.UUID | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation to the HTTP layer.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - ORM rows are mapped to DTOs inside the ``with`` block.
    """

    # ---- Configuration defaults (override per subclass if needed) ----
    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (auth, tracing).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Transaction isolation level (e.g. "READ COMMITTED").
        :type isolation: str | None
        :param enforce_db_readonly: Apply `SET TRANSACTION READ ONLY` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )

    # ------------------------------ Time -------------------------------------

    @staticmethod
    def now_utc():
        """Return the current aware UTC datetime."""
        return utcnow()

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        The ``code`` of the service error is preserved so clients can switch
        on it; the status depends only on the error class.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if not isinstance(exc, ServiceError):
            # Fallback: return untouched (will bubble up to Flask handler)
            return exc

        if isinstance(exc, NotFoundError):
            status = HTTPStatus.NOT_FOUND
        elif isinstance(exc, ConflictError):
            status = HTTPStatus.CONFLICT
        elif isinstance(exc, AuthenticationError):
            status = HTTPStatus.UNAUTHORIZED
        elif isinstance(exc, AuthorizationError):
            status = HTTPStatus.FORBIDDEN
        elif isinstance(exc, (ExpiredError, MaxUsesReachedError)):
            status = HTTPStatus.GONE
        else:
            # Any other ServiceError subclass → 400 Bad Request
            status = HTTPStatus.BAD_REQUEST

        return api_errors.APIError(message=str(exc), status_code=status, code=exc.code)
