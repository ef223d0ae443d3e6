from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class BlogPostCreate(BaseModel):
    title: str = Field(..., min_length=3)
    content: str = Field(..., min_length=1)
    excerpt: Optional[str] = None
    author: Optional[str] = None
    image_url: Optional[str] = None


class BlogPost(BlogPostCreate):
    id: str
    created_at: Optional[datetime] = None
