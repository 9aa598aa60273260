"""Common Pydantic models shared across routes."""

from typing import Optional

from pydantic import BaseModel


class BookOut(BaseModel):
    id: str
    title: str
    author: str
    genre: str
    rating: float
    description: str = ""
    image: Optional[str] = None
