"""
Tests for spreadsheet export, form validators and form schema generation.
"""
import re

from openpyxl import load_workbook

from wms.models import Department, Worker
from wms_utils.export import export_rows
from wms_utils.formSchema import generate_schema_from_model
from wms_utils.validation import is_date, match_pattern, number_between, one_of, required, validate_buffer

FORM_DATA = {}


def test_export_rows_writes_header_and_values():
    columns = [{"key": "Worker_ID", "label": "Worker ID"}, {"key": "Age", "label": "Age"}]
    buffer = export_rows([{"Worker_ID": "W1", "Age": 30}, {"Worker_ID": "W2"}], columns, title="Workers")

    sheet = load_workbook(buffer).active
    assert sheet.title == "Workers"
    assert [c.value for c in sheet[1]] == ["Worker ID", "Age"]
    assert [c.value for c in sheet[2]] == ["W1", 30]
    assert [c.value for c in sheet[3]] == ["W2", None]
    assert sheet["A1"].font.bold
    assert sheet.freeze_panes == "A2"


def test_required_validator():
    validator = required("needed")
    assert validator("x", FORM_DATA) == (True, "")
    assert validator("   ", FORM_DATA) == (False, "needed")
    assert validator(None, FORM_DATA) == (False, "needed")


def test_optional_validators_pass_empty_values():
    for validator in (one_of(["A"]), number_between(1, 2), match_pattern(re.compile("x")), is_date()):
        assert validator("", FORM_DATA)[0]


def test_number_between():
    validator = number_between(18, 65)
    assert validator("18", FORM_DATA)[0]
    assert validator("65", FORM_DATA)[0]
    assert not validator("66", FORM_DATA)[0]
    assert validator("abc", FORM_DATA) == (False, "Please enter a number.")


def test_is_date():
    assert is_date()("2025-02-28", FORM_DATA)[0]
    assert not is_date()("2025-02-30", FORM_DATA)[0]


def test_validate_buffer_reports_first_error_per_field():
    errors = validate_buffer({"Department_code": "", "Max_Labour_Count": "0"}, Department)
    assert errors["Department_code"] == "Department Code is required."
    assert "Max_Labour_Count" in errors


def test_form_schema_describes_constraints():
    schema = generate_schema_from_model(Worker)
    fields = {f["name"]: f for f in schema["fields"]}
    assert schema["endpoint"] == "workers"
    assert fields["Age"]["min"] == 18
    assert fields["Age"]["max"] == 65
    assert fields["Aadhar_Number"]["pattern"] == "^[0-9]{12}$"
    assert {"label": "O+", "value": "O+"} in fields["Blood_Group"]["options"]
    assert fields["Worker_ID"]["readonly_on_edit"] is True
