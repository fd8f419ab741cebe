from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine


def use_explicit_sqlite_transactions(engine: AsyncEngine) -> AsyncEngine:
    """Let SQLAlchemy, not the sqlite3 driver, open transactions.

    The driver only emits BEGIN before DML, so a SAVEPOINT issued after
    plain SELECTs would start the transaction itself and its RELEASE would
    commit it. With the driver's own handling disabled, every transaction
    opens with an explicit BEGIN and savepoints nest inside it.
    No-op for other dialects.
    """
    if engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine
