"""Catalog and search Pydantic models."""

from typing import List, Optional

from pydantic import BaseModel

from .common import BookOut


class BookListResponse(BaseModel):
    books: List[BookOut]
    total: int
    offset: int
    limit: Optional[int] = None


class BookSearchResponse(BaseModel):
    query: str
    books: List[BookOut]
