import enum
import math
from datetime import date, datetime, timedelta, timezone

MS_PER_DAY = 86_400_000
EXPIRING_WINDOW_DAYS = 7


class AlertLevel(enum.Enum):
    NO_DATE = "NO_DATE"
    OVERDUE = "OVERDUE"
    EXPIRING = "EXPIRING"
    VALID = "VALID"


class Validity:
    """Result of classifying a validity date against a reference time.

    ``diff_days`` is the signed ceiling day difference (negative when
    overdue) and is ``None`` only for NO_DATE.
    """

    __slots__ = ("level", "diff_days")

    def __init__(self, level, diff_days=None):
        self.level = level
        self.diff_days = diff_days

    @property
    def days(self):
        """Days to show next to the level: absolute for OVERDUE, remaining otherwise."""
        if self.diff_days is None:
            return None
        return abs(self.diff_days) if self.level is AlertLevel.OVERDUE else self.diff_days

    @property
    def is_alert(self):
        return self.level in (AlertLevel.OVERDUE, AlertLevel.EXPIRING)

    @property
    def label(self):
        if self.level is AlertLevel.OVERDUE:
            return f"OVERDUE ({self.days} days)"
        if self.level is AlertLevel.EXPIRING:
            return f"EXPIRING ({self.days} days)"
        if self.level is AlertLevel.VALID:
            return "VALID"
        return ""

    def __eq__(self, other):
        if not isinstance(other, Validity):
            return NotImplemented
        return self.level is other.level and self.diff_days == other.diff_days

    def __repr__(self):
        return f"Validity({self.level.name}, diff_days={self.diff_days})"


def parse_timestamp(value):
    """Parse an API date value to an aware UTC datetime.

    Date-only strings and ``date`` objects are taken as UTC midnight, the
    way a browser parses ``YYYY-MM-DD``. Returns ``None`` for empty or
    unparseable values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utcnow():
    return datetime.now(timezone.utc)


def diff_days(value, now=None):
    """Ceiling of the millisecond delta between ``value`` and ``now`` in days."""
    validity = parse_timestamp(value)
    if validity is None:
        return None
    reference = parse_timestamp(now) if now is not None else utcnow()
    delta_ms = (validity - reference) / timedelta(milliseconds=1)
    return math.ceil(delta_ms / MS_PER_DAY)


def classify(value, now=None, window=EXPIRING_WINDOW_DAYS):
    days = diff_days(value, now)
    if days is None:
        return Validity(AlertLevel.NO_DATE)
    if days < 0:
        return Validity(AlertLevel.OVERDUE, days)
    if days <= window:
        return Validity(AlertLevel.EXPIRING, days)
    return Validity(AlertLevel.VALID, days)
