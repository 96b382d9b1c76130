"""Commit helpers that turn store failures into structured application errors."""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from sqlalchemy import UniqueConstraint, and_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, StoreError
from app.models.base import Base

logger = logging.getLogger(__name__)

# SQLSTATE and SQLite extended result code for a unique violation.
PG_UNIQUE_VIOLATION = "23505"
SQLITE_UNIQUE_VIOLATION = "SQLITE_CONSTRAINT_UNIQUE"


def _unique_constraints(instance: Base) -> list[UniqueConstraint]:
    table = type(instance).__table__
    named = [
        c for c in table.constraints if isinstance(c, UniqueConstraint) and c.name
    ]
    return sorted(named, key=lambda c: str(c.name))


def _probe_violated_key(db: Session, instance: Base) -> tuple[str, ...] | None:
    """Find the first unique key whose values already exist in the table."""
    model = type(instance)
    for constraint in _unique_constraints(instance):
        key = tuple(c.name for c in constraint.columns)
        values = [getattr(instance, name) for name in key]
        if any(v is None for v in values):
            continue
        clause = and_(*(getattr(model, name) == value for name, value in zip(key, values)))
        if db.execute(select(model.id).where(clause).limit(1)).first() is not None:
            return key
    return None


def reported_unique_violation(error: IntegrityError) -> bool | None:
    """
    Whether the driver classified error as a unique violation.

    None when the driver gives no classification (the caller falls back to probing).
    """
    pgcode = getattr(error.orig, "pgcode", None)
    if isinstance(pgcode, str):
        return pgcode == PG_UNIQUE_VIOLATION
    errorname = getattr(error.orig, "sqlite_errorname", None)
    if isinstance(errorname, str):
        return errorname == SQLITE_UNIQUE_VIOLATION
    return None


def violated_field(db: Session, instance: Base, error: IntegrityError) -> str | None:
    """
    Name the column behind a unique violation for instance.

    Uses the constraint name reported by the driver (PostgreSQL diagnostics) when
    available, otherwise probes the table's unique keys. For composite keys the
    last column is reported (the leading columns scope the key, e.g. user_id).
    """
    diag = getattr(error.orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None)
    key: tuple[str, ...] | None = None
    if constraint_name:
        for constraint in _unique_constraints(instance):
            if constraint.name == constraint_name:
                key = tuple(c.name for c in constraint.columns)
                break
    if key is None:
        key = _probe_violated_key(db, instance)
    return key[-1] if key else None


def _table_name(instance: Base | None) -> str:
    return type(instance).__tablename__ if instance is not None else "<unknown>"


@contextmanager
def store_errors(
    db: Session,
    instance: Base | None = None,
    *,
    conflict_status: int = 409,
    conflict_messages: Mapping[str, str] | None = None,
    conflict_message: str | None = None,
    failure_message: str = "Something went wrong",
) -> Iterator[None]:
    """
    Run flush/commit statements and translate store failures.

    A unique violation becomes ConflictError naming the violated field of instance;
    any other store failure (NOT NULL, foreign key and check violations included)
    becomes StoreError(failure_message). The conflict message is looked up by
    field in conflict_messages, falling back to conflict_message. The session
    is rolled back in both cases.
    """
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        unique = reported_unique_violation(e)
        field = None
        if instance is not None and unique is not False:
            field = violated_field(db, instance, e)
        if unique is None:
            unique = field is not None
        if not unique:
            logger.exception("Integrity error writing %s", _table_name(instance))
            raise StoreError(failure_message) from e
        logger.info(
            "Unique violation on %s (field=%s): %s",
            _table_name(instance),
            field,
            e.orig,
        )
        message = (conflict_messages or {}).get(field or "", conflict_message)
        raise ConflictError(message, field=field, status_code=conflict_status) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store error writing %s", _table_name(instance))
        raise StoreError(failure_message) from e


def add_and_commit(
    db: Session,
    instance: Base,
    *,
    conflict_status: int = 409,
    conflict_messages: Mapping[str, str] | None = None,
    conflict_message: str | None = None,
    failure_message: str = "Something went wrong",
) -> Base:
    """Insert instance, commit, and refresh it. See store_errors for failures."""
    db.add(instance)
    with store_errors(
        db,
        instance,
        conflict_status=conflict_status,
        conflict_messages=conflict_messages,
        conflict_message=conflict_message,
        failure_message=failure_message,
    ):
        db.commit()
    db.refresh(instance)
    return instance
