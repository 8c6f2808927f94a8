from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from linktrack.db.models import Link, format_timestamp

# Response DTOs
class LinkResponse(BaseModel):
    # Python fields are snake_case, JSON keys are camelCase
    id: str
    original_url: str = Field(..., alias="originalUrl")
    created_at: datetime = Field(..., alias="createdAt")
    visit_count: int = Field(..., alias="visitCount")
    short_url: str = Field(..., alias="shortUrl")

    class Config:
        populate_by_name = True

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return format_timestamp(value)

    @classmethod
    def link_fields(cls, link: Link) -> dict:
        return dict(
            id=link.id,
            original_url=link.original_url,
            created_at=link.created_at,
            visit_count=link.visit_count,
            short_url=link.short_url,
        )

    @classmethod
    def from_link(cls, link: Link) -> "LinkResponse":
        return cls(**cls.link_fields(link))
