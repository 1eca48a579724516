"""Offset pagination over SQLAlchemy queries."""
from __future__ import annotations

import math
from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Query

__all__ = ["PageResult", "paginate"]

RowT = TypeVar("RowT")


class PageResult(Generic[RowT]):
    """A slice of rows plus the numbers needed to render pagination controls."""

    def __init__(self, items: list[RowT], total: int, page: int, per_page: int) -> None:
        self.items = items
        self.total = total
        self.page = page
        self.per_page = per_page

    @property
    def last_page(self) -> int:
        """Return the 1-based index of the final page (at least 1)."""
        return max(1, math.ceil(self.total / self.per_page))


def paginate(query: Query[Any], page: int, per_page: int) -> PageResult[Any]:
    """Return page ``page`` (1-based) of ``query`` with ``per_page`` rows."""
    page = max(page, 1)
    total = query.order_by(None).count()
    items = query.offset((page - 1) * per_page).limit(per_page).all()
    return PageResult(items=items, total=total, page=page, per_page=per_page)
