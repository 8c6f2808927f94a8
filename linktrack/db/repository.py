from typing import Dict, List, Optional
import logging

from linktrack.db.models import Link, Visit
from linktrack.db.store import RedisStore

logger = logging.getLogger(__name__)

LINKS_INDEX_KEY = "links"
VISIT_COUNT_FIELD = "visitCount"


def link_key(link_id: str) -> str:
    return f"link:{link_id}"


def visits_key(link_id: str) -> str:
    return f"visits:{link_id}"


def link_exists(store: RedisStore, link_id: str) -> bool:
    with store.guard() as client:
        return bool(client.exists(link_key(link_id)))


def save_link(store: RedisStore, link: Link) -> Link:
    with store.guard() as client:
        pipe = client.pipeline(transaction=True)
        pipe.hset(link_key(link.id), mapping=link.to_hash())
        pipe.rpush(LINKS_INDEX_KEY, link.id)
        pipe.execute()
    return link


def get_link_data(store: RedisStore, link_id: str) -> Optional[Dict[str, str]]:
    with store.guard() as client:
        data = client.hgetall(link_key(link_id))
    if not data or not data.get("id"):
        return None
    return data


def list_link_data(store: RedisStore) -> List[Dict[str, str]]:
    """Hashes of every indexed link, in creation order."""
    with store.guard() as client:
        ids = client.lrange(LINKS_INDEX_KEY, 0, -1)
        if not ids:
            return []
        pipe = client.pipeline(transaction=False)
        for link_id in ids:
            pipe.hgetall(link_key(link_id))
        rows = pipe.execute()

    found = []
    for link_id, data in zip(ids, rows):
        if not data or not data.get("id"):
            logger.warning(f"Indexed link {link_id} has no record, skipping")
            continue
        found.append(data)
    return found


def append_visit(store: RedisStore, link_id: str, visit: Visit) -> int:
    """Bump the counter and append to the log in one MULTI/EXEC; returns the new count."""
    with store.guard() as client:
        pipe = client.pipeline(transaction=True)
        pipe.hincrby(link_key(link_id), VISIT_COUNT_FIELD, 1)
        pipe.rpush(visits_key(link_id), visit.to_json())
        count, _ = pipe.execute()
    return count


def get_raw_visits(store: RedisStore, link_id: str) -> List[str]:
    with store.guard() as client:
        return client.lrange(visits_key(link_id), 0, -1)
