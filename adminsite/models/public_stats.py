from dataclasses import dataclass
from .base_model import BaseModel

@dataclass
class PublicStats(BaseModel):
    """Headline counters shown on the public landing page."""

    members: int
    events: int
    chapters: int
    registered: int
