"""Page/limit pagination envelope."""

from typing import Any


def _div_ceil(lhs: int, rhs: int) -> int:
    return -(-lhs // rhs)


def paginate(content: list[Any], limit: int, page: int, items: int) -> dict[str, Any]:
    """Wrap one page of results with links to the neighbouring pages.

    ``items`` is the total number of rows across all pages. A page past the
    end gets ``previous`` pointing at the last real page.
    """
    first_page = 1
    last_page = _div_ceil(items, limit)

    previous = None
    if page > first_page:
        previous = {"page": max(last_page, first_page) if page > last_page else page - 1, "limit": limit}

    next_ = None
    if page < last_page:
        next_ = {"page": page + 1, "limit": limit}

    return {"next": next_, "previous": previous, "content": content}
