from uuid import UUID

from fastapi import status

from libs.result import Error
from guild_service.api.error import ClientError


def parse_uuid(value: str, code: str, label: str) -> UUID:
    """Parse a path parameter as UUID or fail with 400"""
    try:
        return UUID(value)
    except ValueError:
        raise ClientError(
            Error(code, f"Invalid {label} format"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
