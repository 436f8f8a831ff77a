from fastapi import APIRouter

from giving_server.interfaces.http.routers import campaigns, charities, donations, feeds, posts, updates, users


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(users.router, tags=["users"])
    router.include_router(charities.router, tags=["charities"])
    router.include_router(campaigns.router, tags=["campaigns"])
    router.include_router(updates.router, tags=["updates"])
    router.include_router(posts.router, tags=["posts"])
    router.include_router(donations.router, tags=["donations"])
    router.include_router(feeds.router, tags=["feeds"])
    return router


__all__ = [
    "create_api_router",
]
