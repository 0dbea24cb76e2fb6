"""Shared plumbing for the entity lifecycle services."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rental_inventory.core.errors import ConflictError, DatabaseError, ValidationError
from rental_inventory.core.logging import ServiceLogger, get_service_logger

from .guards import DependencyGuard, UniquenessGuard


class EntityService:
    """Holds the session, acting user and logger every entity service needs."""

    def __init__(self, session: Session, actor_id: str, *, logger: ServiceLogger | None = None) -> None:
        """Initialize service with a database session.

        Args:
            session: Active database session
            actor_id: Authenticated user performing the operations
            logger: Event logger; defaults to one named after the service module
        """
        self._session = session
        self._actor_id = actor_id
        self._logger = logger or get_service_logger(type(self).__module__)
        self._unique = UniquenessGuard(session)
        self._dependencies = DependencyGuard(session)

    @staticmethod
    def _parse_id(value: UUID | str) -> UUID:
        """Accept a UUID or its string form; anything else is a ValidationError."""
        if isinstance(value, UUID):
            return value
        try:
            return UUID(str(value))
        except ValueError:
            raise ValidationError("Validasi gagal", [{"field": "id", "message": "Format ID tidak valid"}]) from None

    @contextmanager
    def _database(self, operation: str, conflict: ConflictError | None = None) -> Iterator[None]:
        """Translate persistence failures into the service error taxonomy.

        IntegrityError becomes ``conflict`` (or a generic ConflictError); any
        other SQLAlchemyError becomes DatabaseError. The session is rolled
        back in both cases. Nothing is retried.
        """
        try:
            yield
        except IntegrityError as e:
            self._session.rollback()
            self._logger.warn("db.integrity_error", "Constraint violated", {"operation": operation, "error": e.orig})
            raise (conflict or ConflictError("Data bertentangan dengan data yang sudah ada")) from e
        except SQLAlchemyError as e:
            self._session.rollback()
            self._logger.error("db.error", "Database operation failed", {"operation": operation}, exc_info=True)
            raise DatabaseError(f"Gagal {operation}") from e
