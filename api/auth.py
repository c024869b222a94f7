from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from api.exceptions.auth import InvalidTokenError, PermissionDeniedError
from api.schemas.user import User, UserAccessToken
from api.utils.jwt import decode_jwt


bearer = HTTPBearer(auto_error=False)


async def get_token(credentials: HTTPAuthorizationCredentials | None = Depends(bearer)) -> UserAccessToken | None:
    if credentials is None:
        return None

    if (data := decode_jwt(credentials.credentials, ["uid", "rt", "data"])) is None:
        return None

    try:
        token = UserAccessToken.model_validate(data)
    except ValidationError:
        return None

    if await token.is_revoked():
        return None

    return token


async def get_user(token: UserAccessToken | None = Depends(get_token)) -> User:
    if token is None:
        raise InvalidTokenError

    return token.to_user()


async def get_admin(user: User = Depends(get_user)) -> User:
    if not user.admin:
        raise PermissionDeniedError

    return user


admin_auth = Depends(get_admin)
