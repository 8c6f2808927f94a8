from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from linktrack.db.models import Visit, format_timestamp

class VisitResponse(BaseModel):
    timestamp: datetime
    user_agent: str = Field(..., alias="userAgent")
    device_type: str = Field(..., alias="deviceType")

    class Config:
        populate_by_name = True

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)

    @classmethod
    def from_visit(cls, visit: Visit) -> "VisitResponse":
        return cls(
            timestamp=visit.timestamp,
            user_agent=visit.user_agent,
            device_type=visit.device_type,
        )
