import math

# wms_utils/pagination.py

DEFAULT_PER_PAGE = 10


class Pagination:
    """One page of an already filtered and sorted row list.

    Mirrors the attributes of Flask-SQLAlchemy's Pagination object
    (``items``, ``total``, ``page``, ``pages``) so screens can serialise it
    the same way.
    """

    def __init__(self, rows, page, per_page):
        self.page = page
        self.per_page = per_page
        self.total = len(rows)
        start = (page - 1) * per_page
        self.items = rows[start:start + per_page]

    @property
    def pages(self):
        return math.ceil(self.total / self.per_page) if self.per_page else 0

    @property
    def has_prev(self):
        return self.page > 1

    @property
    def has_next(self):
        return self.page < self.pages

    @property
    def prev_num(self):
        return clamp_page(self.page - 1, self.pages)

    @property
    def next_num(self):
        return clamp_page(self.page + 1, self.pages)

    def to_dict(self):
        return {
            "page": self.page,
            "per_page": self.per_page,
            "total": self.total,
            "pages": self.pages,
            "has_prev": self.has_prev,
            "has_next": self.has_next,
        }


def clamp_page(page, pages):
    """Clamp into ``[1, pages]`` the way the previous/next controls do."""
    return max(1, min(page, max(pages, 1)))


def paginate(rows, page=1, per_page=DEFAULT_PER_PAGE):
    """
    Slice a row list into a page.

    An explicit page number is not clamped to the last page; a page past the
    end simply has no items.

    Args:
      rows: list of rows, already filtered and sorted
      page: int, 1-based page number
      per_page: int, number of items per page

    Returns:
      Pagination object with .items, .total, .page, .pages etc.
    """
    page = page if page > 0 else 1
    per_page = per_page if per_page > 0 else DEFAULT_PER_PAGE
    return Pagination(list(rows), page, per_page)
