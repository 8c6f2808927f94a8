class InvalidUrl(ValueError):
    """Submitted URL is not an absolute http(s) URL."""


class LinkNotFound(LookupError):
    def __init__(self, link_id: str):
        super().__init__(f"Link not found: {link_id}")
        self.link_id = link_id


class StorageUnavailable(RuntimeError):
    """The key-value store could not be reached."""
