from typing import Any, Type

from starlette import status

from api.exceptions.api_exception import APIException, responses


class InvalidTokenError(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid token"
    description = "This access token is invalid or the session has expired."


class PermissionDeniedError(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Permission denied"
    description = "The user is not allowed to use this endpoint."


def admin_responses(default: type, *args: Type[APIException]) -> dict[int | str, dict[str, Any]]:
    return responses(default, *args, InvalidTokenError, PermissionDeniedError)
