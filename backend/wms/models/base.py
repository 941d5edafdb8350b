import enum
import re


class StatusEnum(enum.Enum):
    active = "Active"
    inactive = "Inactive"
    completed = "Completed"
    suspended = "Suspended"


class FrequencyEnum(enum.Enum):
    three_months = "3 months"
    six_months = "6 months"
    twelve_months = "12 months"
    eighteen_months = "18 months"
    twenty_four_months = "24 months"
    as_needed = "As needed"


class GenderEnum(enum.Enum):
    male = "Male"
    female = "Female"
    other = "Other"


BLOOD_GROUPS = ["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]

INDIAN_STATES = [
    "Andhra Pradesh", "Arunachal Pradesh", "Assam", "Bihar", "Chhattisgarh",
    "Goa", "Gujarat", "Haryana", "Himachal Pradesh", "Jharkhand",
    "Karnataka", "Kerala", "Madhya Pradesh", "Maharashtra", "Manipur",
    "Meghalaya", "Mizoram", "Nagaland", "Odisha", "Punjab",
    "Rajasthan", "Sikkim", "Tamil Nadu", "Telangana", "Tripura",
    "Uttar Pradesh", "Uttarakhand", "West Bengal", "Delhi", "Jammu and Kashmir",
    "Ladakh", "Puducherry", "Chandigarh", "Andaman and Nicobar Islands",
    "Dadra and Nagar Haveli and Daman and Diu", "Lakshadweep",
]


def enum_values(enum_class):
    return [e.value for e in enum_class]


class Field:
    """One attribute of a remote record, with the constraints its form input carries."""

    def __init__(self, name, type="text", required=False, choices=None,
                 min=None, max=None, pattern=None, label=None, default=None):
        self.name = name
        self.type = type
        self.required = required
        if isinstance(choices, enum.EnumMeta):
            choices = enum_values(choices)
        self.choices = list(choices) if choices else None
        self.min = min
        self.max = max
        self.pattern = re.compile(pattern) if pattern else None
        self.label = label or name.replace("_", " ")
        self.default = default


class EntitySchema:
    """Declarative description of one remote entity.

    Subclasses set ``endpoint`` (the REST collection name), ``key`` (the
    business key sent in URLs), ``fields`` and ``list_config``.
    """

    name = None
    endpoint = None
    key = None
    singular = None
    fields = []
    list_config = None
    is_register = False

    @classmethod
    def field(cls, name):
        for f in cls.fields:
            if f.name == name:
                return f
        return None

    @classmethod
    def field_names(cls):
        return [f.name for f in cls.fields]

    @classmethod
    def key_of(cls, record):
        return record.get(cls.key)

    @classmethod
    def identity(cls, record):
        return (str(record.get(cls.key)),)

    @classmethod
    def find(cls, records, key, record_date=None):
        """First record whose business key matches, or None."""
        wanted = cls.identity({cls.key: key, "Record_Date": record_date})
        for record in records:
            if cls.identity(record) == wanted:
                return record
        return None


class RegisterSchema(EntitySchema):
    """Register entities are keyed by (Worker_ID, Record_Date)."""

    key = "Worker_ID"
    code_field = None
    is_register = True

    @classmethod
    def identity(cls, record):
        return (str(record.get("Worker_ID")), _date_part(record.get("Record_Date")))


def _date_part(value):
    if value is None:
        return ""
    return str(value).split("T")[0]


# quarterly buckets offered by every date-range filter
PRESET_YEARS = (2024, 2025, 2026)


def columns(*pairs):
    return [{"key": key, "label": label} for key, label in pairs]
