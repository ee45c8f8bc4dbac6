from dataclasses import dataclass
from typing import Optional
from .base_model import BaseModel

@dataclass
class PublicEvent(BaseModel):
    """An event listed on the public site. ``date`` is an ISO-8601 string."""

    id: str
    title: str
    date: str
    description: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    status: str = 'upcoming'
    color: Optional[str] = None
