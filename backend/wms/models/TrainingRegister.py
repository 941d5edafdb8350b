from wms.listing import ListConfig
from wms_utils.filtering import ExactFilter, PresetRangeFilter, TextFilter, ValidityFilter, quarter_presets
from wms_utils.sorting import DATE, DESC, STRING
from .base import PRESET_YEARS, RegisterSchema, Field, StatusEnum, columns, enum_values


class TrainingRegister(RegisterSchema):
    name = "TrainingRegister"
    endpoint = "training-registers"
    singular = "training registration"
    code_field = "Training_Code"

    fields = [
        Field("Worker_ID", "select", required=True, label="Worker ID"),
        Field("Department_Code", "select", required=True, label="Department"),
        Field("Training_Code", "select", required=True, label="Training"),
        Field("Validity_Date", "date", required=True, label="Validity Date"),
        Field("Status", "select", required=True, choices=StatusEnum, default="Active"),
        Field("Remarks", "textarea"),
    ]

    # Active registrations always lead the table, whatever the sort column
    list_config = ListConfig(
        "training-registers",
        filters=[
            TextFilter("workerId", "Worker_ID", label="Worker ID"),
            ExactFilter("departmentCode", "Department_Code", label="Department"),
            ExactFilter("trainingCode", "Training_Code", label="Training"),
            ExactFilter("status", "Status", options=enum_values(StatusEnum)),
            PresetRangeFilter("dateRange", "Record_Date", quarter_presets(PRESET_YEARS),
                              label="Date Range"),
            ValidityFilter("validityAlert"),
        ],
        sort_types={
            "Worker_ID": None,
            "Department_Code": STRING,
            "Training_Code": STRING,
            "Record_Date": DATE,
            "Validity_Date": DATE,
            "Status": STRING,
        },
        default_sort=("Record_Date", DESC),
        pin_active=True,
        columns=columns(
            ("Worker_ID", "Worker ID"), ("Department_Code", "Department"),
            ("Training_Code", "Training"), ("Record_Date", "Record Date"),
            ("Validity_Date", "Validity Date"), ("Validity_Alert", "Validity Alert"),
            ("Status", "Status"), ("Remarks", "Remarks"),
        ),
    )
