from pathlib import Path
import logging

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from linktrack.api.deps import get_recorder
from linktrack.core.config import settings
from linktrack.services.errors import LinkNotFound
from linktrack.services.visits import VisitRecorder
from linktrack.utils.encoding import is_valid_short_id

logger = logging.getLogger(__name__)

router = APIRouter()


def fallback_page():
    """What an unknown short id gets: the dashboard index when built, else a plain 404."""
    if settings.STATIC_DIR:
        index = Path(settings.STATIC_DIR) / "index.html"
        if index.is_file():
            return FileResponse(index)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Not Found"})


def mount_dashboard(app: FastAPI, directory: str):
    """Serve the built dashboard (/, /assets/...) behind every registered route."""
    app.mount("/", StaticFiles(directory=directory, html=True), name="dashboard")


@router.get("/{link_id}", tags=["redirect"])
def redirect_to_url_endpoint(link_id: str, request: Request, recorder: VisitRecorder = Depends(get_recorder)):
    if not is_valid_short_id(link_id):
        return fallback_page()

    try:
        original_url = recorder.record_visit(link_id, request.headers.get("user-agent", ""))
    except LinkNotFound:
        logger.info(f"Redirect miss for {link_id}, falling through")
        return fallback_page()

    logger.info(f"Redirect {link_id} -> {original_url[:50]}")
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
