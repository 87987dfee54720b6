"""Paged listing primitives.

``Pageable`` describes the requested slice (0-based page index, page size and
sort directives) and ``Page`` is the result envelope. The header helpers
build ``X-Total-Count`` and an RFC 5988 ``Link`` header from the current
request URL, keeping every query parameter except ``page`` and ``size``.
"""
import math
from typing import Callable, Generic, Literal, Optional, TypeVar
from urllib.parse import parse_qsl, urlencode

from fastapi import Query
from fastapi.datastructures import URL
from pydantic import BaseModel, ConfigDict, Field

from ..core.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from .errors import BadRequestAlertError

T = TypeVar("T")

HEADER_X_TOTAL_COUNT = "X-Total-Count"
HEADER_LINK_FORMAT = '<{uri}>; rel="{rel}"'


class SortOrder(BaseModel):
    field: str
    direction: Literal["asc", "desc"] = "asc"

    model_config = ConfigDict(frozen=True)

    @property
    def expression(self) -> str:
        """Ordering expression understood by Tortoise's ``order_by``."""
        return self.field if self.direction == "asc" else f"-{self.field}"


class Pageable(BaseModel):
    page: int = Field(0, ge=0, description="Zero-based page index")
    size: int = Field(DEFAULT_PAGE_SIZE, gt=0, description="Page size")
    sort: tuple[SortOrder, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def offset(self) -> int:
        return self.page * self.size


class Page(BaseModel, Generic[T]):
    content: list[T]
    total_elements: int
    number: int
    size: int

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 1
        return math.ceil(self.total_elements / self.size)

    @property
    def is_last(self) -> bool:
        return self.number + 1 >= self.total_pages

    def map(self, func: Callable[[T], object]) -> "Page":
        return Page(
            content=[func(item) for item in self.content],
            total_elements=self.total_elements,
            number=self.number,
            size=self.size,
        )


def parse_sort(
    values: list[str], sortable: dict[str, str], entity_name: str
) -> tuple[SortOrder, ...]:
    """
    Parses ``sort`` query values of the form ``property[,asc|desc]``.

    A single value may also chain several properties before the direction,
    e.g. ``name,id,desc``. Property names are looked up in ``sortable``,
    which maps accepted request names to store field names.
    """
    orders: list[SortOrder] = []
    for value in values:
        parts = [part.strip() for part in value.split(",") if part.strip()]
        if not parts:
            continue
        direction = "asc"
        if parts[-1].lower() in ("asc", "desc"):
            direction = parts.pop().lower()
        for name in parts:
            field = sortable.get(name)
            if field is None:
                raise BadRequestAlertError(
                    f"Cannot sort by unknown property '{name}'", entity_name, "sortinvalid"
                )
            orders.append(SortOrder(field=field, direction=direction))
    return tuple(orders)


def pageable_params(sortable: dict[str, str], entity_name: str):
    """Builds a FastAPI dependency that reads ``page``, ``size`` and ``sort``."""

    def _pageable(
        page: int = Query(0, ge=0, description="Zero-based page index"),
        size: int = Query(
            DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Number of items per page"
        ),
        sort: Optional[list[str]] = Query(
            None, description="Sort directive, property[,asc|desc]; repeatable"
        ),
    ) -> Pageable:
        return Pageable(page=page, size=size, sort=parse_sort(sort or [], sortable, entity_name))

    return _pageable


def _page_uri(url: URL, page: int, size: int) -> str:
    """
    The request URL with ``page`` and ``size`` set to the given values.

    Existing ``page``/``size`` parameters keep their position in the query and
    missing ones are appended, so a link differs from the request only in
    those values.
    """
    replacements = {"page": str(page), "size": str(size)}
    query: list[tuple[str, str]] = []
    for key, value in parse_qsl(url.query, keep_blank_values=True):
        if key in replacements:
            if key not in dict(query):
                query.append((key, replacements[key]))
            continue
        query.append((key, value))
    present = {key for key, _ in query}
    query.extend((key, value) for key, value in replacements.items() if key not in present)
    uri = str(url.replace(query=urlencode(query)))
    return uri.replace(",", "%2C").replace(";", "%3B")


def generate_pagination_headers(url: URL, page: Page) -> dict[str, str]:
    """
    Builds the ``X-Total-Count`` and ``Link`` headers for a page.

    Links are emitted in the order next, prev, last, first; ``next`` only
    when there is a following page and ``prev`` only after the first page.
    """
    number, size = page.number, page.size
    links: list[str] = []
    if number < page.total_pages - 1:
        links.append(HEADER_LINK_FORMAT.format(uri=_page_uri(url, number + 1, size), rel="next"))
    if number > 0:
        links.append(HEADER_LINK_FORMAT.format(uri=_page_uri(url, number - 1, size), rel="prev"))
    last_page = page.total_pages - 1 if page.total_pages > 0 else 0
    links.append(HEADER_LINK_FORMAT.format(uri=_page_uri(url, last_page, size), rel="last"))
    links.append(HEADER_LINK_FORMAT.format(uri=_page_uri(url, 0, size), rel="first"))
    return {
        HEADER_X_TOTAL_COUNT: str(page.total_elements),
        "Link": ",".join(links),
    }
