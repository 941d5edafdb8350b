"""Generic list-management engine shared by every table screen.

A screen is described once by a :class:`ListConfig` (its filters, sortable
columns and default ordering). :class:`ListState` holds what the user picked
and is small enough to live in the Flask session. :class:`ListView` joins a
fetched collection with a state and derives the visible page on demand.
"""
from wms_utils.filtering import FilterError, apply_filters
from wms_utils.pagination import DEFAULT_PER_PAGE, clamp_page, paginate
from wms_utils.sorting import ASC, DESC, sort_rows, toggle


class ListConfig:
    def __init__(self, name, filters=(), sort_types=None, default_sort=None,
                 pin_active=False, columns=None):
        self.name = name
        self.filters = {f.name: f for f in filters}
        self.sort_types = dict(sort_types or {})
        # (key, direction) or None to keep the collection's own order
        self.default_sort = default_sort
        self.pin_active = pin_active
        self.columns = list(columns or [])

    def describe_filters(self):
        return [f.describe() for f in self.filters.values()]


class ListState:
    def __init__(self, filters=None, sort_key=None, direction=ASC, page=1):
        self.filters = dict(filters or {})
        self.sort_key = sort_key
        self.direction = direction
        self.page = page

    @classmethod
    def initial(cls, config):
        if config.default_sort:
            key, direction = config.default_sort
            return cls(sort_key=key, direction=direction)
        return cls()

    @classmethod
    def from_dict(cls, data, config):
        if not data:
            return cls.initial(config)
        return cls(
            filters=data.get("filters"),
            sort_key=data.get("sort_key"),
            direction=data.get("direction", ASC),
            page=data.get("page", 1),
        )

    def to_dict(self):
        return {
            "filters": self.filters,
            "sort_key": self.sort_key,
            "direction": self.direction,
            "page": self.page,
        }


class ListView:
    """Filter, sort and paginate a collection for one screen."""

    def __init__(self, config, items=None, state=None, per_page=DEFAULT_PER_PAGE, now=None):
        self.config = config
        self.items = list(items or [])
        self.state = state or ListState.initial(config)
        self.per_page = per_page
        self.now = now

    def ingest(self, items):
        self.items = list(items)

    # transitions

    def apply_filter(self, name, value):
        flt = self.config.filters.get(name)
        if flt is None:
            raise FilterError(f"Unknown filter '{name}'")
        value = "" if value is None else str(value)
        if value:
            flt.validate(value)
            self.state.filters[name] = value
        else:
            self.state.filters.pop(name, None)
        self.state.page = 1

    def clear_filters(self):
        self.state.filters = {}
        self.state.page = 1

    def set_sort(self, key):
        if self.config.sort_types and key not in self.config.sort_types:
            raise FilterError(f"Cannot sort by '{key}'")
        self.state.direction = toggle(self.state.sort_key, self.state.direction, key)
        self.state.sort_key = key

    def goto_page(self, page):
        self.state.page = int(page)

    def prev_page(self):
        self.state.page = clamp_page(self.state.page - 1, self.total_pages)

    def next_page(self):
        self.state.page = clamp_page(self.state.page + 1, self.total_pages)

    # derived

    @property
    def filtered(self):
        return apply_filters(self.items, self.config.filters, self.state.filters, self.now)

    @property
    def filtered_sorted(self):
        rows = self.filtered
        if self.state.sort_key is None:
            return rows
        return sort_rows(
            rows,
            self.state.sort_key,
            self.state.direction,
            kind=self.config.sort_types.get(self.state.sort_key),
            pin_active=self.config.pin_active,
        )

    @property
    def total_pages(self):
        return self.pagination.pages

    @property
    def pagination(self):
        return paginate(self.filtered_sorted, self.state.page, self.per_page)

    @property
    def visible_rows(self):
        return self.pagination.items

    def to_dict(self, decorate=None):
        page = self.pagination
        rows = [decorate(row) for row in page.items] if decorate else page.items
        return {
            "items": rows,
            **page.to_dict(),
            "filters": self.state.filters,
            "sort": {"key": self.state.sort_key, "direction": self.state.direction},
            "available_filters": self.config.describe_filters(),
            "columns": self.config.columns,
        }


def apply_request_args(view, args):
    """Replay the screen interactions carried by a request's query args.

    ``clear`` drops every filter, a filter name with a new value sets that filter, ``sort``
    picks or toggles the sort key, ``page`` jumps to a page and ``nav``
    (``prev``/``next``) steps within bounds. Page changes are applied last,
    after the filters that would reset them.
    """
    if args.get("clear"):
        view.clear_filters()
    for name in view.config.filters:
        # re-sent values leave the page alone
        if name in args and args.get(name) != view.state.filters.get(name, ""):
            view.apply_filter(name, args.get(name))
    if args.get("sort"):
        view.set_sort(args.get("sort"))
    if args.get("page"):
        try:
            view.goto_page(int(args.get("page")))
        except ValueError:
            raise FilterError("page must be an integer")
    nav = args.get("nav")
    if nav == "prev":
        view.prev_page()
    elif nav == "next":
        view.next_page()
    elif nav:
        raise FilterError(f"Unknown navigation '{nav}'")


__all__ = ["ListConfig", "ListState", "ListView", "apply_request_args", "ASC", "DESC"]
