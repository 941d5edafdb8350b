from wms.listing import ListConfig
from wms_utils.filtering import ExactFilter, TextFilter
from wms_utils.sorting import ASC, STRING
from .base import EntitySchema, Field, FrequencyEnum, columns, enum_values


class Training(EntitySchema):
    name = "Training"
    endpoint = "trainings"
    key = "Training_Code"
    singular = "training"

    fields = [
        Field("Training_Code", required=True, label="Training Code"),
        Field("Training_Name", required=True, label="Training Name"),
        Field("Frequency", "select", required=True, choices=FrequencyEnum),
        Field("Training_Incharge", required=True, label="Training Incharge"),
    ]

    list_config = ListConfig(
        "trainings",
        filters=[
            TextFilter("trainingCode", "Training_Code", label="Training Code"),
            TextFilter("trainingName", "Training_Name", label="Training Name"),
            ExactFilter("frequency", "Frequency", options=enum_values(FrequencyEnum)),
            TextFilter("trainingIncharge", "Training_Incharge", label="Training Incharge"),
        ],
        sort_types={
            "Training_Code": None,
            "Training_Name": STRING,
            "Frequency": STRING,
            "Training_Incharge": STRING,
        },
        default_sort=("Training_Name", ASC),
        columns=columns(
            ("Training_Code", "Training Code"), ("Training_Name", "Training Name"),
            ("Frequency", "Frequency"), ("Training_Incharge", "Training Incharge"),
        ),
    )
