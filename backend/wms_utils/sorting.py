from wms_utils.validity import parse_timestamp

ASC = "asc"
DESC = "desc"

DATE = "date"
STRING = "string"
NUMBER = "number"


def _string_key(value):
    # casefold first, then lowercase-before-uppercase on ties
    return value.casefold(), value.swapcase()


def _number_key(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _date_key(value):
    parsed = parse_timestamp(value)
    return parsed.timestamp() if parsed else None


def detect_kind(rows, field):
    """Strings compare as text, anything else as numbers, judged by the first value present."""
    for row in rows:
        value = row.get(field)
        if value is not None and value != "":
            return STRING if isinstance(value, str) else NUMBER
    return STRING


def sort_key_for(field, kind):
    """Build a key function for ``field``.

    Missing or uncomparable values sort after every real value in ascending
    order.
    """
    converter = {DATE: _date_key, STRING: lambda v: _string_key(str(v)), NUMBER: _number_key}[kind]

    def key(row):
        raw = row.get(field)
        if raw is None or raw == "":
            return (1, ())
        converted = converter(raw)
        if converted is None:
            return (1, ())
        return (0, converted)

    return key


def sort_rows(rows, field, direction=ASC, kind=None, pin_active=False):
    kind = kind or detect_kind(rows, field)
    ordered = sorted(rows, key=sort_key_for(field, kind), reverse=(direction == DESC))
    if pin_active:
        # stable: keeps the chosen ordering inside each group
        ordered.sort(key=lambda row: row.get("Status") != "Active")
    return ordered


def toggle(current_key, current_direction, key):
    if current_key == key and current_direction == ASC:
        return DESC
    return ASC
