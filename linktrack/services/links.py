from typing import List
import logging

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from linktrack.db import repository
from linktrack.db.models import Link, utcnow
from linktrack.db.store import RedisStore
from linktrack.services.errors import InvalidUrl, LinkNotFound
from linktrack.utils.encoding import SHORT_ID_LENGTH, generate_short_id


logger = logging.getLogger(__name__)

MAX_ID_ATTEMPTS = 5
MAX_URL_LENGTH = 8192

_http_url = TypeAdapter(AnyHttpUrl)


def validate_original_url(original_url) -> str:
    """Accept only absolute http(s) URLs; the submitted string is kept as is."""
    if not isinstance(original_url, str) or not original_url.strip():
        raise InvalidUrl("Invalid URL provided.")
    if len(original_url) > MAX_URL_LENGTH:
        raise InvalidUrl(f"URL must be at most {MAX_URL_LENGTH} characters.")
    try:
        _http_url.validate_python(original_url)
    except ValidationError:
        raise InvalidUrl("Only absolute http(s) URLs are allowed.")
    return original_url


class LinkRegistry:

    def __init__(self, store: RedisStore, base_url: str, id_length: int = SHORT_ID_LENGTH):
        self.store = store
        self.base_url = base_url.rstrip("/")
        self.id_length = id_length

    def _new_id(self) -> str:
        for attempt in range(MAX_ID_ATTEMPTS):
            link_id = generate_short_id(self.id_length)
            if not repository.link_exists(self.store, link_id):
                return link_id
            logger.info(f"Short id collision on attempt {attempt + 1}/{MAX_ID_ATTEMPTS}")
        raise RuntimeError(f"Failed to generate unique short id after {MAX_ID_ATTEMPTS} attempts")

    def create(self, original_url: str) -> Link:
        url = validate_original_url(original_url)
        link_id = self._new_id()
        link = Link(
            id=link_id,
            original_url=url,
            created_at=utcnow(),
            visit_count=0,
            short_url=f"{self.base_url}/{link_id}",
        )
        repository.save_link(self.store, link)
        logger.info("Created link %s for URL: %s", link.id, url[:50])
        return link

    def get(self, link_id: str) -> Link:
        data = repository.get_link_data(self.store, link_id)
        if data is None:
            raise LinkNotFound(link_id)
        return Link.from_hash(data, self.base_url)

    def list(self) -> List[Link]:
        """All links, newest first; equal timestamps keep creation order."""
        links = []
        for data in repository.list_link_data(self.store):
            try:
                links.append(Link.from_hash(data, self.base_url))
            except (KeyError, ValueError) as e:
                logger.warning(f"Skipping corrupt link record {data.get('id')}: {e}")
        return sorted(links, key=lambda link: link.created_at, reverse=True)
