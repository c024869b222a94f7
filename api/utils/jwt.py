from datetime import timedelta
from typing import Any, cast

import jwt

from api.settings import settings
from api.utils.utc import utcnow


def encode_jwt(data: dict[str, Any], ttl: timedelta) -> str:
    return jwt.encode({**data, "exp": utcnow() + ttl}, settings.jwt_secret, "HS256")


def decode_jwt(token: str, require: list[str] | None = None) -> dict[str, Any] | None:
    try:
        return cast(
            dict[str, Any],
            jwt.decode(token, settings.jwt_secret, ["HS256"], options={"require": [*(require or []), "exp"]}),
        )
    except jwt.InvalidTokenError:
        return None
