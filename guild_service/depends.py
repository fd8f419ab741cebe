from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from guild_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from guild_service.adapter.sqlite import use_explicit_sqlite_transactions
from guild_service.api.utils.jwt import user_id_from_token

engine = use_explicit_sqlite_transactions(
    create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()


async def create_tables():
    # Import entities so their tables are registered on SQLModel.metadata
    import guild_service.domain.entities  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> UUID:
    """
    Resolve the caller from the bearer token.

    Raises:
        HTTPException: 401 if the token is invalid, expired or lacks a usable user_id
    """
    user_id = user_id_from_token(credentials.credentials)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    return user_id
