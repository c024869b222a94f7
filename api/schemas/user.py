from pydantic import BaseModel, ConfigDict

from api.redis import auth_redis


class User(BaseModel):
    id: str
    email_verified: bool
    admin: bool


class UserAccessTokenData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email_verified: bool
    admin: bool


class UserAccessToken(BaseModel):
    model_config = ConfigDict(extra="ignore")

    uid: str
    rt: str
    data: UserAccessTokenData

    def to_user(self) -> User:
        return User(id=self.uid, **self.data.model_dump())

    async def is_revoked(self) -> bool:
        return bool(await auth_redis.exists(f"session_logout:{self.rt}"))
