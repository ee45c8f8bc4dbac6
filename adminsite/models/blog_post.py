from dataclasses import dataclass
from typing import Optional
from .base_model import BaseModel

@dataclass
class BlogPost(BaseModel):
    id: str
    title: str
    created_at: str
    excerpt: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
