"""Offset pagination shared by every list view."""

from typing import Awaitable, Callable, Generic, TypeVar

from pydantic import BaseModel

from newsboard.domain.error import ValidationError

T = TypeVar("T")

# (start, count) -> (items, total)
FetchPage = Callable[[int, int], Awaitable[tuple[list[T], int]]]

PLACEHOLDER = "$"


class Page(BaseModel, Generic[T]):
    """One page of a listing."""

    items: list[T]
    total: int
    start: int
    count: int
    has_more: bool
    next_link: str | None = None


class Paginator(Generic[T]):
    """Fetches ``per_page`` items from an offset and builds the "more" link.

    The link template must contain exactly one ``$``, replaced by the offset
    of the next page. Paginators are stateless and can be reused.
    """

    def __init__(self, fetch: FetchPage, link_template: str, per_page: int) -> None:
        if link_template.count(PLACEHOLDER) != 1:
            raise ValidationError(
                f"Link template must contain exactly one '{PLACEHOLDER}'"
            )
        if per_page < 1:
            raise ValidationError("Page size must be positive")
        self.fetch = fetch
        self.link_template = link_template
        self.per_page = per_page

    async def page(self, start: int = 0) -> Page[T]:
        """Fetch the page starting at ``start`` (negative means 0)."""
        start = max(start, 0)
        items, total = await self.fetch(start, self.per_page)
        has_more = start + self.per_page < total
        next_link = (
            self.link_template.replace(PLACEHOLDER, str(start + self.per_page))
            if has_more
            else None
        )
        return Page(
            items=items,
            total=total,
            start=start,
            count=self.per_page,
            has_more=has_more,
            next_link=next_link,
        )
