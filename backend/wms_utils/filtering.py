from wms_utils.validity import AlertLevel, classify, parse_timestamp


class FilterError(ValueError):
    """Raised for unknown filter names or values outside a preset list."""


def _text(value):
    return "" if value is None else str(value)


class BaseFilter:
    kind = None

    def __init__(self, name, field, label=None, options=None):
        self.name = name
        self.field = field
        self.label = label or field.replace("_", " ")
        self.options = list(options) if options else []

    def validate(self, value):
        return value

    def matches(self, row, value, now=None):
        raise NotImplementedError

    def describe(self):
        return {
            "name": self.name,
            "field": self.field,
            "label": self.label,
            "type": self.kind,
            "options": self.options,
        }


class TextFilter(BaseFilter):
    """Case-insensitive substring match on the stringified field."""

    kind = "text"

    def matches(self, row, value, now=None):
        return value.lower() in _text(row.get(self.field)).lower()


class ExactFilter(BaseFilter):
    kind = "select"

    def matches(self, row, value, now=None):
        return _text(row.get(self.field)) == value


class PresetRangeFilter(BaseFilter):
    """Inclusive range test against one of a fixed list of presets.

    ``presets`` is a list of ``(value, label)`` pairs; numeric presets look
    like ``"18-25"``, date presets like ``"2024-01-01 to 2024-03-31"``.
    """

    kind = "range"

    def __init__(self, name, field, presets, numeric=False, label=None):
        super().__init__(name, field, label=label,
                         options=[{"value": v, "label": l} for v, l in presets])
        self.numeric = numeric
        self._bounds = {v: self._parse(v) for v, _ in presets}

    def _parse(self, value):
        if self.numeric:
            low, high = value.split("-")
            return float(low), float(high)
        start, end = value.split(" to ")
        return parse_timestamp(start), parse_timestamp(end)

    def validate(self, value):
        if value not in self._bounds:
            raise FilterError(f"Unsupported range '{value}' for {self.name}")
        return value

    def _coerce(self, raw):
        if self.numeric:
            try:
                return float(raw)
            except (TypeError, ValueError):
                return None
        return parse_timestamp(raw)

    def matches(self, row, value, now=None):
        low, high = self._bounds[value]
        current = self._coerce(row.get(self.field))
        if current is None:
            return False
        return low <= current <= high


VALIDITY_OPTIONS = [
    ("overdue", "Overdue"),
    ("expiring", "Expiring Soon (<=7 days)"),
    ("valid", "Valid (>7 days)"),
]

_VALIDITY_LEVELS = {
    "overdue": AlertLevel.OVERDUE,
    "expiring": AlertLevel.EXPIRING,
    "valid": AlertLevel.VALID,
}


class ValidityFilter(BaseFilter):
    kind = "validity"

    def __init__(self, name, field="Validity_Date", label=None):
        super().__init__(name, field, label=label or "Validity Alert",
                         options=[{"value": v, "label": l} for v, l in VALIDITY_OPTIONS])

    def validate(self, value):
        if value not in _VALIDITY_LEVELS:
            raise FilterError(f"Unsupported validity alert '{value}'")
        return value

    def matches(self, row, value, now=None):
        # undated rows are never hidden by the validity filter
        if row.get(self.field) in (None, ""):
            return True
        return classify(row.get(self.field), now).level is _VALIDITY_LEVELS[value]


def quarter_presets(years):
    presets = []
    ends = ("03-31", "06-30", "09-30", "12-31")
    starts = ("01-01", "04-01", "07-01", "10-01")
    for year in years:
        for index, (start, end) in enumerate(zip(starts, ends), start=1):
            presets.append((f"{year}-{start} to {year}-{end}", f"Q{index} {year}"))
    return presets


AGE_PRESETS = [(r, r) for r in ("18-25", "26-35", "36-45", "46-55", "56-65")]
LABOUR_COUNT_PRESETS = [(r, r) for r in ("1-10", "11-25", "26-50", "51-100", "101-500", "501-10000")]


def apply_filters(rows, filters, values, now=None):
    """Return the rows satisfying every active filter.

    ``filters`` maps filter name to filter; ``values`` maps filter name to the
    selected value. Empty values are ignored.
    """
    active = [(filters[name], value) for name, value in values.items() if value not in (None, "")]
    if not active:
        return list(rows)
    return [row for row in rows if all(flt.matches(row, value, now) for flt, value in active)]
