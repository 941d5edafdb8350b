from wms.listing import ListConfig
from wms_utils.filtering import LABOUR_COUNT_PRESETS, PresetRangeFilter, TextFilter
from wms_utils.sorting import ASC, NUMBER, STRING
from .base import EntitySchema, Field, columns


class Department(EntitySchema):
    name = "Department"
    endpoint = "departments"
    key = "Department_code"
    singular = "department"

    fields = [
        Field("Department_code", required=True, label="Department Code"),
        Field("Department_Name", required=True, label="Department Name"),
        Field("Incharge", required=True),
        Field("Max_Labour_Count", "number", required=True, min=1, label="Max Labour Count"),
    ]

    list_config = ListConfig(
        "departments",
        filters=[
            TextFilter("departmentCode", "Department_code", label="Department Code"),
            TextFilter("departmentName", "Department_Name", label="Department Name"),
            TextFilter("incharge", "Incharge"),
            PresetRangeFilter("maxLabourCount", "Max_Labour_Count", LABOUR_COUNT_PRESETS,
                              numeric=True, label="Max Labour Count"),
        ],
        sort_types={
            "Department_code": None,
            "Department_Name": STRING,
            "Incharge": STRING,
            "Max_Labour_Count": NUMBER,
        },
        default_sort=("Department_Name", ASC),
        columns=columns(
            ("Department_code", "Department Code"), ("Department_Name", "Department Name"),
            ("Incharge", "Incharge"), ("Max_Labour_Count", "Max Labour Count"),
        ),
    )
