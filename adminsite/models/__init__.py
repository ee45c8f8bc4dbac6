from .base_model import BaseModel
from .public_stats import PublicStats
from .public_event import PublicEvent
from .blog_post import BlogPost

__all__ = [
    "BaseModel",
    "PublicStats",
    "PublicEvent",
    "BlogPost",
]
