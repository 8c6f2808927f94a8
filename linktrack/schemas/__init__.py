# re-export common schemas for simpler imports
from .LinkCreateRequest import LinkCreateRequest
from .LinkResponse import LinkResponse
from .VisitResponse import VisitResponse
from .LinkStatsResponse import LinkStatsResponse

__all__ = [
    "LinkCreateRequest",
    "LinkResponse",
    "VisitResponse",
    "LinkStatsResponse",
]
