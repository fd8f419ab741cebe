import functools

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from guild_service.app.repositories.errors import StoreError, UniqueViolationError

# SQLSTATE for unique_violation (PostgreSQL drivers expose it as sqlstate/pgcode)
UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE

    # sqlite3 reports "UNIQUE constraint failed: <table>.<column>"
    errorname = getattr(orig, "sqlite_errorname", None)
    if errorname:
        return errorname in ("SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY")
    return "unique constraint failed" in str(orig).lower()


def translate_store_errors(func):
    """Map SQLAlchemy failures onto the application's store errors"""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise UniqueViolationError(str(exc.orig)) from exc
            raise StoreError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    return wrapper
