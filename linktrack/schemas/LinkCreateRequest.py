from pydantic import BaseModel

# Request DTOs
class LinkCreateRequest(BaseModel):
    # Validated by the link registry so a bad URL is a 400, not a 422
    url: str
