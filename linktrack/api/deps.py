from fastapi import Depends, Request

from linktrack.core.config import settings
from linktrack.db.store import RedisStore
from linktrack.services.links import LinkRegistry
from linktrack.services.visits import VisitRecorder


def get_store(request: Request) -> RedisStore:
    """FastAPI dependency: the store opened by the application lifespan."""
    return request.app.state.store


def get_registry(store: RedisStore = Depends(get_store)) -> LinkRegistry:
    return LinkRegistry(store, settings.BASE_URL, settings.SHORT_ID_LENGTH)


def get_recorder(registry: LinkRegistry = Depends(get_registry)) -> VisitRecorder:
    return VisitRecorder(registry)
