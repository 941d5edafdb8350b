from enum import Enum
from datetime import datetime, date


def to_input_value(value, field_type="text"):
    """Stringify one record value for binding to a form input."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()[:10] if field_type == "date" else value.isoformat()
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value)
    if field_type == "date":
        return text.split("T")[0]
    return text


def to_form_buffer(record, schema):
    """Seed an edit buffer from a record: every schema field as a string."""
    return {
        field.name: to_input_value(record.get(field.name), field.type)
        for field in schema.fields
    }


def blank_form_buffer(schema):
    return {field.name: field.default or "" for field in schema.fields}


def from_form_buffer(buffer, schema):
    """Build the request body from a validated buffer.

    Numeric inputs go out as numbers, optional inputs left blank go out as
    empty strings, the way the browser form posts them.
    """
    output = {}
    for field in schema.fields:
        value = buffer.get(field.name, "")
        if isinstance(value, str):
            value = value.strip() if field.type != "textarea" else value
        if field.type == "number" and value != "":
            number = float(value)
            value = int(number) if number.is_integer() else number
        output[field.name] = value
    return output
