import sqlite3

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from guild_service.adapter.repositories.store_errors import translate_store_errors
from guild_service.app.repositories.errors import StoreError, UniqueViolationError


class DriverError(Exception):
    """Driver exception carrying a SQLSTATE, as PostgreSQL drivers raise"""

    def __init__(self, message: str, sqlstate: str):
        super().__init__(message)
        self.sqlstate = sqlstate


@translate_store_errors
async def failing_write(exc: Exception):
    raise exc


def integrity_error(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO guilds ...", {}, orig)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "orig",
    [
        sqlite3.IntegrityError("UNIQUE constraint failed: guilds.slug"),
        sqlite3.IntegrityError(
            "UNIQUE constraint failed: guild_memberships.user_id, guild_memberships.guild_id"
        ),
        DriverError('duplicate key value violates unique constraint "ix_guilds_slug"', "23505"),
    ],
)
async def test_unique_violations_are_reported_as_such(orig):
    with pytest.raises(UniqueViolationError):
        await failing_write(integrity_error(orig))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "orig",
    [
        sqlite3.IntegrityError("NOT NULL constraint failed: guilds.name"),
        sqlite3.IntegrityError("FOREIGN KEY constraint failed"),
        DriverError('insert violates foreign key constraint "guild_id_fkey"', "23503"),
    ],
)
async def test_other_integrity_errors_are_plain_store_errors(orig):
    with pytest.raises(StoreError) as exc_info:
        await failing_write(integrity_error(orig))

    assert not isinstance(exc_info.value, UniqueViolationError)
    assert str(orig) in str(exc_info.value)


@pytest.mark.asyncio
async def test_operational_errors_are_store_errors():
    exc = OperationalError("SELECT 1", {}, sqlite3.OperationalError("database is locked"))

    with pytest.raises(StoreError) as exc_info:
        await failing_write(exc)

    assert not isinstance(exc_info.value, UniqueViolationError)


@pytest.mark.asyncio
async def test_results_pass_through():
    @translate_store_errors
    async def read():
        return "row"

    assert await read() == "row"
