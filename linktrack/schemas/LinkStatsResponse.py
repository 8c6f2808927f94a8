from typing import List

from linktrack.schemas.LinkResponse import LinkResponse
from linktrack.schemas.VisitResponse import VisitResponse
from linktrack.services.visits import LinkStats

class LinkStatsResponse(LinkResponse):
    # visitCount is the stored total, visits is the filtered log
    visits: List[VisitResponse]

    @classmethod
    def from_stats(cls, stats: LinkStats) -> "LinkStatsResponse":
        return cls(
            **cls.link_fields(stats.link),
            visits=[VisitResponse.from_visit(v) for v in stats.visits],
        )
