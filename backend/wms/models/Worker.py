from wms.listing import ListConfig
from wms_utils.filtering import AGE_PRESETS, ExactFilter, PresetRangeFilter, TextFilter
from wms_utils.sorting import DESC, NUMBER, STRING
from .base import (
    BLOOD_GROUPS, INDIAN_STATES, EntitySchema, Field, GenderEnum, StatusEnum,
    columns, enum_values,
)


class Worker(EntitySchema):
    name = "Worker"
    endpoint = "workers"
    key = "Worker_ID"
    singular = "worker"

    fields = [
        Field("Worker_ID", required=True, label="Worker ID"),
        Field("Age", "number", required=True, min=18, max=65),
        Field("Gender", "select", required=True, choices=GenderEnum),
        Field("Address", "textarea", required=True),
        Field("State", "select", required=True, choices=INDIAN_STATES),
        Field("Qualification", required=True),
        Field("Skill", "textarea", required=True, label="Skills"),
        Field("Aadhar_Number", required=True, pattern=r"^[0-9]{12}$", label="AADHAR Number"),
        Field("PF_Number", required=True, label="PF Number"),
        Field("Blood_Group", "select", required=True, choices=BLOOD_GROUPS),
        Field("Status", "select", choices=StatusEnum, default="Active"),
        Field("Remarks", "textarea"),
    ]

    list_config = ListConfig(
        "workers",
        filters=[
            TextFilter("name", "Worker_ID", label="Worker ID"),
            ExactFilter("gender", "Gender", options=enum_values(GenderEnum)),
            ExactFilter("state", "State", options=INDIAN_STATES),
            ExactFilter("bloodGroup", "Blood_Group", label="Blood Group", options=BLOOD_GROUPS),
            PresetRangeFilter("ageRange", "Age", AGE_PRESETS, numeric=True, label="Age Range"),
        ],
        sort_types={
            "Worker_ID": None,
            "Age": NUMBER,
            "Gender": STRING,
            "State": STRING,
            "Qualification": STRING,
            "Skill": STRING,
            "Blood_Group": STRING,
            "Status": STRING,
        },
        default_sort=("Worker_ID", DESC),
        columns=columns(
            ("Worker_ID", "Worker ID"), ("Age", "Age"), ("Gender", "Gender"),
            ("State", "State"), ("Qualification", "Qualification"), ("Skill", "Skills"),
            ("Blood_Group", "Blood Group"), ("Aadhar_Number", "AADHAR Number"),
            ("PF_Number", "PF Number"), ("Remarks", "Remarks"),
        ),
    )
