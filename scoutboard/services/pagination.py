import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Page:
    items: list
    page: int
    total_pages: int
    start_index: int
    end_index: int  # exclusive, may run past ``total``
    total: int

    def display_range(self):
        """(first, last, total) for an "X–Y / Z" label, 1-based and clamped."""
        if self.total == 0:
            return 0, 0, 0
        return self.start_index + 1, min(self.end_index, self.total), self.total

    def to_dict(self):
        first, last, total = self.display_range()
        return {
            "page": self.page,
            "total_pages": self.total_pages,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "total": total,
            "first": first,
            "last": last,
        }


def paginate(items, page, page_size) -> Page:
    """Slice ``items`` into fixed-size pages.

    ``page`` is clamped into ``[1, total_pages]``; it is driven by pager
    buttons, so an out-of-range value is not worth an error.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    items = list(items)
    total_pages = max(1, math.ceil(len(items) / page_size))
    page = min(max(int(page), 1), total_pages)
    start = (page - 1) * page_size
    end = start + page_size
    return Page(
        items=items[start:end],
        page=page,
        total_pages=total_pages,
        start_index=start,
        end_index=end,
        total=len(items),
    )
