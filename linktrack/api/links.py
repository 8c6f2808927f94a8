from datetime import date
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from linktrack.api.deps import get_recorder, get_registry
from linktrack.schemas import LinkCreateRequest, LinkResponse, LinkStatsResponse
from linktrack.services.errors import InvalidUrl, LinkNotFound
from linktrack.services.links import LinkRegistry
from linktrack.services.visits import VisitRecorder
from linktrack.utils.encoding import is_valid_short_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/links", tags=["links"])

@router.post("", response_model=LinkResponse, status_code=status.HTTP_201_CREATED)
def create_link_endpoint(link_request: LinkCreateRequest, registry: LinkRegistry = Depends(get_registry)):
    try:
        link = registry.create(link_request.url)
    except InvalidUrl as e:
        logger.warning(f"Rejected URL {link_request.url[:50]!r}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info(f"API success: Shortened {link.original_url[:50]}... to {link.id}")
    return LinkResponse.from_link(link)

@router.get("", response_model=List[LinkResponse])
def list_links_endpoint(registry: LinkRegistry = Depends(get_registry)):
    return [LinkResponse.from_link(link) for link in registry.list()]

@router.get("/{link_id}/stats", response_model=LinkStatsResponse)
def get_link_stats_endpoint(
    link_id: str,
    start: Optional[date] = Query(None, description="First day to include (UTC)"),
    end: Optional[date] = Query(None, description="Last day to include (UTC)"),
    recorder: VisitRecorder = Depends(get_recorder),
):
    """Link summary plus its visits within [start, end], newest first."""
    try:
        if not is_valid_short_id(link_id):
            raise LinkNotFound(link_id)
        stats = recorder.stats(link_id, start, end)
    except LinkNotFound:
        logger.warning(f"Stats 404: Link not found: {link_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found.")

    return LinkStatsResponse.from_stats(stats)
