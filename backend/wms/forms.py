"""Create/edit form state machine for one entity screen.

CLOSED -> CREATING -> CLOSED and CLOSED -> EDITING(record) -> CLOSED. Cancel
and a successful submit both discard the buffer. A failed submit leaves the
form open with the error kept on the controller.
"""
import enum
import logging

from wms.gateway import GatewayError
from wms_utils.serialization import blank_form_buffer, from_form_buffer, to_form_buffer
from wms_utils.validation import validate_buffer

logger = logging.getLogger(__name__)


class FormMode(enum.Enum):
    closed = "closed"
    creating = "creating"
    editing = "editing"


class FormStateError(Exception):
    """An action was requested that the current form state does not allow."""


class FormValidationError(Exception):
    def __init__(self, errors):
        super().__init__("Form has invalid fields")
        self.errors = errors


class FormController:
    def __init__(self, schema, mode=FormMode.closed, buffer=None, original=None, error=None):
        self.schema = schema
        self.mode = mode
        self.buffer = dict(buffer or {})
        self.original = original
        self.error = error

    @classmethod
    def from_dict(cls, schema, data):
        if not data:
            return cls(schema)
        return cls(
            schema,
            mode=FormMode(data.get("mode", "closed")),
            buffer=data.get("buffer"),
            original=data.get("original"),
            error=data.get("error"),
        )

    def to_dict(self):
        return {
            "mode": self.mode.value,
            "buffer": self.buffer,
            "original": self.original,
            "error": self.error,
        }

    @property
    def is_open(self):
        return self.mode is not FormMode.closed

    def _close(self):
        self.mode = FormMode.closed
        self.buffer = {}
        self.original = None
        self.error = None

    def open_create(self):
        self.mode = FormMode.creating
        self.buffer = blank_form_buffer(self.schema)
        self.original = None
        self.error = None

    def open_edit(self, record):
        self.mode = FormMode.editing
        self.buffer = to_form_buffer(record, self.schema)
        self.original = dict(record)
        self.error = None

    def cancel(self):
        self._close()

    def update_fields(self, values):
        if not self.is_open:
            raise FormStateError("The form is not open")
        known = set(self.schema.field_names())
        for name, value in values.items():
            if name in known:
                self.buffer[name] = "" if value is None else str(value)

    def submit(self, gateway):
        """Validate and send the buffer. Returns the refreshed collection.

        Validation failures raise :class:`FormValidationError` before any
        request is made; gateway failures are recorded on ``error`` and
        re-raised with the form still open.
        """
        if not self.is_open:
            raise FormStateError("The form is not open")

        errors = validate_buffer(self.buffer, self.schema)
        if errors:
            raise FormValidationError(errors)

        payload = from_form_buffer(self.buffer, self.schema)
        try:
            if self.mode is FormMode.editing:
                key = self.schema.key_of(self.original)
                record_date = None
                if self.schema.is_register:
                    record_date = str(self.original.get("Record_Date", "")).split("T")[0]
                gateway.update(key, payload, record_date=record_date)
            else:
                gateway.create(payload)
        except GatewayError as exc:
            self.error = exc.message
            logger.warning("%s form submit failed: %s", self.schema.name, exc.message)
            raise

        self._close()
        return gateway.list()
