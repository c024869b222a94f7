from fastapi import APIRouter

from . import slots


ROUTERS: list[APIRouter] = [slots.router]
ROUTER = APIRouter()
for router in ROUTERS:
    ROUTER.include_router(router)


__all__ = ["ROUTER"]
