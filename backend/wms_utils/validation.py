# wms_utils/validation.py
from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

# --- Type Aliases ---
ValidationResult = tuple[bool, str]
# A validator gets the value and the whole form buffer for context
ValidatorFunc = Callable[[Any | None, dict[str, Any]], ValidationResult]

DATE_FORMAT_STORAGE: str = "%Y-%m-%d"

# ===================================================================
# GENERIC VALIDATOR GENERATORS
# ===================================================================


def required(message: str = "This field is required.") -> ValidatorFunc:
    """Ensures a value is not None, not an empty string, and not just whitespace."""
    def validator(value: Any | None, form_data: dict[str, Any]) -> ValidationResult:
        if value is None:
            return False, message
        if isinstance(value, str) and not value.strip():
            return False, message
        return True, ""
    return validator


def one_of(choices: list[str], message: str = "Please select a valid option.") -> ValidatorFunc:
    """Ensures a select value is one of the offered options. Empty is left to `required`."""
    allowed = {str(c) for c in choices}

    def validator(value: Any | None, form_data: dict[str, Any]) -> ValidationResult:
        if value is None or value == "":
            return True, ""
        if str(value) not in allowed:
            return False, message
        return True, ""
    return validator


def number_between(min_value: float | None = None, max_value: float | None = None,
                   message: str | None = None) -> ValidatorFunc:
    """Ensures a numeric input parses and lies inside the given bounds."""
    def validator(value: Any | None, form_data: dict[str, Any]) -> ValidationResult:
        if value is None or value == "":
            return True, ""
        try:
            number = float(value)
        except (TypeError, ValueError):
            return False, "Please enter a number."
        if min_value is not None and number < min_value:
            return False, message or f"Value must be greater than or equal to {min_value}."
        if max_value is not None and number > max_value:
            return False, message or f"Value must be less than or equal to {max_value}."
        return True, ""
    return validator


def match_pattern(pattern, message: str = "Please match the requested format.") -> ValidatorFunc:
    """Ensures a string value matches a compiled regex pattern."""
    def validator(value: Any | None, form_data: dict[str, Any]) -> ValidationResult:
        if not value or not isinstance(value, str):
            return True, ""  # empty values are `required`'s job
        if not pattern.match(value.strip()):
            return False, message
        return True, ""
    return validator


def is_date(message: str = "Please enter a valid date.") -> ValidatorFunc:
    def validator(value: Any | None, form_data: dict[str, Any]) -> ValidationResult:
        if not value:
            return True, ""
        try:
            datetime.strptime(str(value).split("T")[0], DATE_FORMAT_STORAGE)
        except ValueError:
            return False, message
        return True, ""
    return validator


def validators_for(field) -> list[ValidatorFunc]:
    """The native input constraints of a schema field, as validators."""
    chain: list[ValidatorFunc] = []
    if field.required:
        chain.append(required(f"{field.label} is required."))
    if field.choices:
        chain.append(one_of(field.choices, f"{field.label} must be one of: {', '.join(field.choices)}."))
    if field.type == "number":
        chain.append(number_between(field.min, field.max))
    if field.type == "date":
        chain.append(is_date())
    if field.pattern is not None:
        chain.append(match_pattern(field.pattern, f"{field.label} has an invalid format."))
    return chain


def validate_buffer(buffer: dict[str, Any], schema) -> dict[str, str]:
    """Run every field's chain and return the first error message per failing field."""
    errors: dict[str, str] = {}
    for field in schema.fields:
        for validator in validators_for(field):
            is_valid, message = validator(buffer.get(field.name), buffer)
            if not is_valid:
                errors[field.name] = message
                break
    return errors
