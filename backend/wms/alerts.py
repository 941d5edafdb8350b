"""Alerts screen: overdue and expiring registrations, plus acknowledgement.

In ``active`` mode the rows come from the API's ``/alerts`` endpoint, whose
classification is taken as-is; ``completed`` mode reads the full register
list and keeps the acknowledged rows.
"""
from wms.listing import ListConfig
from wms.models import TradeRegister, TrainingRegister
from wms.models.base import PRESET_YEARS, StatusEnum, columns, enum_values
from wms_utils.filtering import ExactFilter, PresetRangeFilter, TextFilter, quarter_presets
from wms_utils.sorting import ASC, DATE, STRING
from wms_utils.validity import classify

ALERT_TYPES = {
    "trade": TradeRegister,
    "training": TrainingRegister,
}

ACTIVE = "active"
COMPLETED = "completed"
ALERT_MODES = (ACTIVE, COMPLETED)


def alert_list_config(alert_type):
    schema = ALERT_TYPES[alert_type]
    code = schema.code_field
    return ListConfig(
        f"alerts-{alert_type}",
        filters=[
            TextFilter("workerId", "Worker_ID", label="Worker ID"),
            ExactFilter("departmentCode", "Department_Code", label="Department"),
            ExactFilter("tradeOrTrainingCode", code, label=code.replace("_", " ")),
            ExactFilter("status", "Status", options=enum_values(StatusEnum)),
            PresetRangeFilter("validityRange", "Validity_Date", quarter_presets(PRESET_YEARS),
                              label="Validity Date Range"),
        ],
        sort_types={
            "Worker_ID": None,
            "Department_Code": STRING,
            code: STRING,
            "Record_Date": DATE,
            "Validity_Date": DATE,
            "Status": STRING,
        },
        default_sort=("Validity_Date", ASC),
        columns=columns(
            ("Worker_ID", "Worker ID"), ("Department_Code", "Department"), (code, code.replace("_", " ")),
            ("Record_Date", "Record Date"), ("Validity_Date", "Validity Date"),
            ("Validity_Alert", "Alert"), ("Status", "Status"), ("Alert_Completed", "Completed"),
        ),
    )


ALERT_LIST_CONFIGS = {alert_type: alert_list_config(alert_type) for alert_type in ALERT_TYPES}


def load_alert_rows(gateway, mode):
    if mode == ACTIVE:
        return [row for row in gateway.list_alerts() if row.get("Alert_Completed") is not True]
    return [row for row in gateway.list() if row.get("Alert_Completed") is True]


def annotate(row, now=None):
    return {**row, "Validity_Alert": classify(row.get("Validity_Date"), now).label}


def alert_stats(rows):
    stats = {"active": 0, "inactive": 0, "completed": 0}
    for row in rows:
        if row.get("Alert_Completed"):
            stats["completed"] += 1
        elif row.get("Status") == StatusEnum.active.value:
            stats["active"] += 1
        else:
            stats["inactive"] += 1
    return stats
