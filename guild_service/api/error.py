from fastapi import status
from libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


# Business error code -> HTTP status, shared by every route
ERROR_STATUS = {
    "INVALID_FORMAT": status.HTTP_400_BAD_REQUEST,
    "INVALID_TYPE": status.HTTP_400_BAD_REQUEST,
    "INVALID_VALUE": status.HTTP_400_BAD_REQUEST,
    "INVALID_ROLE": status.HTTP_400_BAD_REQUEST,
    "INVALID_SLUG": status.HTTP_400_BAD_REQUEST,
    "INVALID_NAME": status.HTTP_400_BAD_REQUEST,
    "INVALID_DESCRIPTION": status.HTTP_400_BAD_REQUEST,
    "INVALID_PAGINATION": status.HTTP_400_BAD_REQUEST,
    "NO_PENDING_INVITE": status.HTTP_400_BAD_REQUEST,
    "OWNER_CANNOT_LEAVE": status.HTTP_400_BAD_REQUEST,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "GUILD_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVITE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "MEMBERSHIP_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "NOT_A_MEMBER": status.HTTP_404_NOT_FOUND,
    "SLUG_CONFLICT": status.HTTP_409_CONFLICT,
    "ALREADY_MEMBER": status.HTTP_409_CONFLICT,
    "CANNOT_CHANGE_OWNER_ROLE": status.HTTP_409_CONFLICT,
    "CANNOT_REMOVE_OWNER": status.HTTP_409_CONFLICT,
}


def raise_for_error(error: Error):
    """Raise the HTTP-facing exception for a failed use case result"""
    status_code = ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
