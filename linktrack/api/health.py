from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from linktrack.api.deps import get_store
from linktrack.db.store import RedisStore

router = APIRouter(tags=["health"])

# simple liveness
@router.get("/health")
def health():
    return {"status": "healthy", "service": "linktrack"}

# readiness: check Redis connectivity
@router.get("/ready")
def readiness(store: RedisStore = Depends(get_store)):
    redis_ok = store.ping()
    content = {"ready": redis_ok, "details": {"redis": "ok" if redis_ok else "unavailable"}}
    if not redis_ok:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=content)
    return content
