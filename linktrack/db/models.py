import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional


def utcnow() -> datetime:
    """Current UTC instant truncated to millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


def format_timestamp(value: datetime) -> str:
    """ISO-8601, millisecond precision, 'Z' suffix (2024-01-05T23:59:00.000Z)."""
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"Timestamp must be a string, got {type(value).__name__}")
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    # Naive values are stored UTC
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True)
class Link:
    id: str
    original_url: str
    created_at: datetime
    visit_count: int
    short_url: str

    def to_hash(self) -> Dict[str, str]:
        """Field mapping stored in the link:{id} hash."""
        return {
            "id": self.id,
            "originalUrl": self.original_url,
            "createdAt": format_timestamp(self.created_at),
            "visitCount": str(self.visit_count),
            "shortUrl": self.short_url,
        }

    @classmethod
    def from_hash(cls, data: Dict[str, str], base_url: Optional[str] = None) -> "Link":
        link_id = data["id"]
        short_url = data.get("shortUrl")
        if not short_url and base_url:
            short_url = f"{base_url}/{link_id}"
        return cls(
            id=link_id,
            original_url=data["originalUrl"],
            created_at=parse_timestamp(data["createdAt"]),
            visit_count=int(data.get("visitCount") or 0),
            short_url=short_url or "",
        )


@dataclass(frozen=True)
class Visit:
    timestamp: datetime
    user_agent: str
    device_type: str

    def to_json(self) -> str:
        return json.dumps({
            "timestamp": format_timestamp(self.timestamp),
            "userAgent": self.user_agent,
            "deviceType": self.device_type,
        })

    @classmethod
    def from_json(cls, raw: str) -> "Visit":
        """Decode one visits:{id} entry; raises ValueError when it is corrupt."""
        try:
            data = json.loads(raw)
            device_type = data["deviceType"]
            user_agent = data.get("userAgent") or ""
            if not isinstance(device_type, str) or not isinstance(user_agent, str):
                raise ValueError("Visit fields must be strings")
            return cls(
                timestamp=parse_timestamp(data["timestamp"]),
                user_agent=user_agent,
                device_type=device_type,
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed visit entry: {e}") from e
