from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional
import logging

from linktrack.db import repository
from linktrack.db.models import Link, Visit, utcnow
from linktrack.services.links import LinkRegistry
from linktrack.utils.device import detect_device_type


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkStats:
    link: Link
    visits: List[Visit]


def start_of_day(day: date) -> datetime:
    """Calendar dates are read as UTC days."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def filter_visits(visits: Iterable[Visit], start: Optional[date] = None, end: Optional[date] = None) -> List[Visit]:
    """Keep visits inside [start 00:00, day after end 00:00) and sort newest first.

    Either bound may be omitted. The end date counts through its last instant.
    """
    lower = start_of_day(start) if start else None
    # date.max has no following day, so it leaves the range open
    upper = start_of_day(end + timedelta(days=1)) if end and end < date.max else None

    kept = [
        v for v in visits
        if (lower is None or v.timestamp >= lower)
        and (upper is None or v.timestamp < upper)
    ]
    return sorted(kept, key=lambda v: v.timestamp, reverse=True)


class VisitRecorder:

    def __init__(self, registry: LinkRegistry):
        self.registry = registry
        self.store = registry.store

    def record_visit(self, link_id: str, user_agent: Optional[str]) -> str:
        """Log one redirect for link_id and return the URL to redirect to.

        Raises LinkNotFound, with nothing written, when the id is unknown.
        """
        link = self.registry.get(link_id)
        user_agent = user_agent or ""
        visit = Visit(
            timestamp=utcnow(),
            user_agent=user_agent,
            device_type=detect_device_type(user_agent),
        )
        count = repository.append_visit(self.store, link.id, visit)
        logger.debug("Visit %s recorded for %s (%s)", count, link.id, visit.device_type)
        return link.original_url

    def load_visits(self, link_id: str) -> List[Visit]:
        visits = []
        for position, raw in enumerate(repository.get_raw_visits(self.store, link_id)):
            try:
                visits.append(Visit.from_json(raw))
            except ValueError as e:
                logger.warning(f"Skipping corrupt visit #{position} of {link_id}: {e}")
        return visits

    def stats(self, link_id: str, start: Optional[date] = None, end: Optional[date] = None) -> LinkStats:
        link = self.registry.get(link_id)
        visits = filter_visits(self.load_visits(link.id), start, end)
        return LinkStats(link=link, visits=visits)
