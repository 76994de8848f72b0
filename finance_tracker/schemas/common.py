# finance_tracker/schemas/common.py
from decimal import Decimal
from typing import Annotated, Generic, List, TypeVar
from pydantic import BaseModel, PlainSerializer

# Exact decimal in Python, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

T = TypeVar("T")

class PaginatedResponse(BaseModel, Generic[T]):
    items: List[T]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
