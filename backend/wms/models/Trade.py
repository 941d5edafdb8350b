from wms.listing import ListConfig
from wms_utils.filtering import ExactFilter, TextFilter
from wms_utils.sorting import ASC, STRING
from .base import EntitySchema, Field, FrequencyEnum, columns, enum_values


class Trade(EntitySchema):
    name = "Trade"
    endpoint = "trades"
    key = "Trade_Code"
    singular = "trade"

    fields = [
        Field("Trade_Code", required=True, label="Trade Code"),
        Field("Trade_Name", required=True, label="Trade Name"),
        Field("Training_Frequency", "select", required=True, choices=FrequencyEnum,
              label="Training Frequency"),
    ]

    list_config = ListConfig(
        "trades",
        filters=[
            TextFilter("tradeCode", "Trade_Code", label="Trade Code"),
            TextFilter("tradeName", "Trade_Name", label="Trade Name"),
            ExactFilter("trainingFrequency", "Training_Frequency", label="Training Frequency",
                        options=enum_values(FrequencyEnum)),
        ],
        sort_types={
            "Trade_Code": None,
            "Trade_Name": STRING,
            "Training_Frequency": STRING,
        },
        default_sort=("Trade_Name", ASC),
        columns=columns(
            ("Trade_Code", "Trade Code"), ("Trade_Name", "Trade Name"),
            ("Training_Frequency", "Training Frequency"),
        ),
    )
