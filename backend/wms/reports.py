"""Cross-entity reports derived in memory from fully loaded collections.

Joins compare the string form of the keys, take the first match and fall
back to ``"Unknown"`` for keys with no match, so no source row is dropped.
"""
from wms.gateway import fetch_all
from wms.listing import ListConfig
from wms.models.base import StatusEnum, enum_values
from wms_utils.filtering import ExactFilter, TextFilter
from wms_utils.sorting import ASC, DATE, NUMBER, STRING
from wms_utils.validity import AlertLevel, classify

UNKNOWN = "Unknown"
STATUSES = enum_values(StatusEnum)


class ReportData:
    """The five collections a report screen loads before deriving anything."""

    def __init__(self, workers=(), departments=(), trades=(), trade_registers=(),
                 training_registers=()):
        self.workers = list(workers)
        self.departments = list(departments)
        self.trades = list(trades)
        self.trade_registers = list(trade_registers)
        self.training_registers = list(training_registers)


def find_first(rows, field, value):
    wanted = str(value)
    for row in rows:
        if str(row.get(field)) == wanted:
            return row
    return None


def lookup(rows, field, value, target):
    match = find_first(rows, field, value)
    if match is None or match.get(target) in (None, ""):
        return UNKNOWN
    return match.get(target)


def _blank_tally():
    tally = {f"{status}_Count": 0 for status in STATUSES}
    tally.update(Total_Count=0, Overdue_Count=0, Expiring_Count=0, Valid_Count=0)
    return tally


def _count(tally, row, now):
    tally["Total_Count"] += 1
    status_key = f"{row.get('Status')}_Count"
    if status_key in tally:
        tally[status_key] += 1
    level = classify(row.get("Validity_Date"), now).level
    if level is AlertLevel.OVERDUE:
        tally["Overdue_Count"] += 1
    elif level is AlertLevel.EXPIRING:
        tally["Expiring_Count"] += 1
    elif level is AlertLevel.VALID:
        tally["Valid_Count"] += 1


def _grouped(rows, first, second):
    groups = {}
    for row in rows:
        groups.setdefault((str(row.get(first)), str(row.get(second))), []).append(row)
    return groups


def department_wise(data, now=None):
    output = []
    for (dept_code, trade_code), rows in _grouped(data.trade_registers, "Department_Code", "Trade_Code").items():
        tally = _blank_tally()
        for row in rows:
            _count(tally, row, now)
        output.append({
            "Department_Code": rows[0].get("Department_Code"),
            "Department_Name": lookup(data.departments, "Department_code", dept_code, "Department_Name"),
            "Trade_Code": rows[0].get("Trade_Code"),
            "Trade_Name": lookup(data.trades, "Trade_Code", trade_code, "Trade_Name"),
            **tally,
        })
    return output


def trade_wise(data, now=None):
    output = []
    for (trade_code, dept_code), rows in _grouped(data.trade_registers, "Trade_Code", "Department_Code").items():
        tally = _blank_tally()
        for row in rows:
            _count(tally, row, now)
        output.append({
            "Trade_Code": rows[0].get("Trade_Code"),
            "Trade_Name": lookup(data.trades, "Trade_Code", trade_code, "Trade_Name"),
            "Department_Code": rows[0].get("Department_Code"),
            "Department_Name": lookup(data.departments, "Department_code", dept_code, "Department_Name"),
            **tally,
        })
    return output


def _alert_rows(rows, kind, code_field, data, now):
    for row in rows:
        if row.get("Status") != StatusEnum.active.value:
            continue
        validity = classify(row.get("Validity_Date"), now)
        if not validity.is_alert:
            continue
        yield {
            "Type": kind,
            "Worker_ID": row.get("Worker_ID"),
            "Skill": lookup(data.workers, "Worker_ID", row.get("Worker_ID"), "Skill"),
            "Department_Code": row.get("Department_Code"),
            "Department_Name": lookup(data.departments, "Department_code", row.get("Department_Code"),
                                      "Department_Name"),
            "Code": row.get(code_field),
            "Record_Date": row.get("Record_Date"),
            "Validity_Date": row.get("Validity_Date"),
            "Status": row.get("Status"),
            "Alert_Type": validity.level.value,
            "Days_Remaining": validity.diff_days,
            "Alert_Completed": bool(row.get("Alert_Completed")),
        }


def alert_wise(data, now=None):
    rows = list(_alert_rows(data.trade_registers, "Trade", "Trade_Code", data, now))
    rows.extend(_alert_rows(data.training_registers, "Training", "Training_Code", data, now))
    rows.sort(key=lambda r: (r["Alert_Type"] != AlertLevel.OVERDUE.value, r["Days_Remaining"]))
    return rows


def worker_history(data, now=None, worker_id=None):
    """Every trade and training registration of one worker, newest first."""
    if worker_id in (None, ""):
        return []
    if find_first(data.workers, "Worker_ID", worker_id) is None:
        return []

    history = []
    for kind, rows in (("Trade", data.trade_registers), ("Training", data.training_registers)):
        for row in rows:
            if str(row.get("Worker_ID")) != str(worker_id):
                continue
            history.append({
                **row,
                "Type": kind,
                "Record_Type": f"{kind} Registration",
                "Department_Name": lookup(data.departments, "Department_code", row.get("Department_Code"),
                                          "Department_Name"),
                "Validity_Alert": classify(row.get("Validity_Date"), now).label,
            })
    history.sort(key=lambda r: str(r.get("Record_Date") or ""), reverse=True)
    return history


def department_workers(data, now=None):
    return [
        {**worker, "Department_Name": lookup(data.departments, "Department_code",
                                             worker.get("Department_Code"), "Department_Name")}
        for worker in data.workers
    ]


def active_workers(data, now=None):
    return [worker for worker in data.workers if worker.get("Status") == StatusEnum.active.value]


def _columns(*keys):
    return [{"key": k, "label": k.replace("_", " ")} for k in keys]


_TALLY_SORTS = {f"{s}_Count": NUMBER for s in STATUSES}
_TALLY_SORTS.update(Total_Count=NUMBER, Overdue_Count=NUMBER, Expiring_Count=NUMBER, Valid_Count=NUMBER)
_TALLY_COLUMNS = ["Total_Count", *(f"{s}_Count" for s in STATUSES), "Overdue_Count", "Expiring_Count", "Valid_Count"]


class Report:
    def __init__(self, key, label, build, list_config, needs_worker=False):
        self.key = key
        self.label = label
        self.build = build
        self.list_config = list_config
        self.needs_worker = needs_worker


REPORTS = {
    r.key: r for r in (
        Report(
            "department-wise", "Department-wise Report", department_wise,
            ListConfig(
                "department-wise",
                filters=[
                    ExactFilter("departmentCode", "Department_Code", label="Department"),
                    ExactFilter("tradeCode", "Trade_Code", label="Trade"),
                ],
                sort_types={"Department_Code": None, "Department_Name": STRING, "Trade_Code": None,
                            "Trade_Name": STRING, **_TALLY_SORTS},
                default_sort=("Department_Code", ASC),
                columns=_columns("Department_Code", "Department_Name", "Trade_Code", "Trade_Name",
                                 *_TALLY_COLUMNS),
            ),
        ),
        Report(
            "trade-wise", "Trade-wise Report", trade_wise,
            ListConfig(
                "trade-wise",
                filters=[
                    ExactFilter("tradeCode", "Trade_Code", label="Trade"),
                    ExactFilter("departmentCode", "Department_Code", label="Department"),
                ],
                sort_types={"Trade_Code": None, "Trade_Name": STRING, "Department_Code": None,
                            "Department_Name": STRING, **_TALLY_SORTS},
                default_sort=("Trade_Code", ASC),
                columns=_columns("Trade_Code", "Trade_Name", "Department_Code", "Department_Name",
                                 *_TALLY_COLUMNS),
            ),
        ),
        Report(
            "alert-wise", "Alert-wise Report", alert_wise,
            ListConfig(
                "alert-wise",
                filters=[
                    TextFilter("workerId", "Worker_ID", label="Worker ID"),
                    ExactFilter("departmentCode", "Department_Code", label="Department"),
                    ExactFilter("type", "Type", options=["Trade", "Training"]),
                    ExactFilter("alertType", "Alert_Type", label="Alert Type",
                                options=[AlertLevel.OVERDUE.value, AlertLevel.EXPIRING.value]),
                ],
                sort_types={"Type": STRING, "Worker_ID": None, "Department_Code": None, "Code": None,
                            "Record_Date": DATE, "Validity_Date": DATE, "Alert_Type": STRING,
                            "Days_Remaining": NUMBER},
                default_sort=None,
                columns=_columns("Type", "Worker_ID", "Skill", "Department_Code", "Department_Name", "Code",
                                 "Record_Date", "Validity_Date", "Status", "Alert_Type",
                                 "Days_Remaining", "Alert_Completed"),
            ),
        ),
        Report(
            "worker-history", "Worker-wise Training History", worker_history,
            ListConfig(
                "worker-history",
                sort_types={"Record_Type": STRING, "Type": STRING, "Department_Name": STRING,
                            "Record_Date": DATE, "Validity_Date": DATE, "Status": STRING},
                default_sort=None,
                columns=_columns("Record_Type", "Type", "Department_Name", "Record_Date",
                                 "Validity_Date", "Validity_Alert", "Status", "Remarks"),
            ),
            needs_worker=True,
        ),
        Report(
            "department-workers", "Department-wise Workers List", department_workers,
            ListConfig(
                "department-workers",
                filters=[
                    TextFilter("workerId", "Worker_ID", label="Worker ID"),
                    ExactFilter("departmentCode", "Department_Code", label="Department"),
                    ExactFilter("status", "Status", options=STATUSES),
                ],
                sort_types={"Worker_ID": None, "Department_Name": STRING, "Age": NUMBER, "Gender": STRING,
                            "State": STRING, "Qualification": STRING, "Status": STRING},
                default_sort=("Worker_ID", ASC),
                columns=_columns("Worker_ID", "Department_Name", "Age", "Gender", "State",
                                 "Qualification", "Status"),
            ),
        ),
        Report(
            "active-workers", "Active Workers List", active_workers,
            ListConfig(
                "active-workers",
                filters=[TextFilter("workerId", "Worker_ID", label="Worker ID")],
                sort_types={"Worker_ID": None, "Age": NUMBER, "Gender": STRING, "State": STRING,
                            "Qualification": STRING, "Skill": STRING, "Blood_Group": STRING},
                default_sort=("Worker_ID", ASC),
                columns=_columns("Worker_ID", "Age", "Gender", "State", "Qualification", "Skill",
                                 "Blood_Group"),
            ),
        ),
    )
}


def build_report(key, data, now=None, worker_id=None):
    report = REPORTS[key]
    if report.needs_worker:
        return report.build(data, now, worker_id=worker_id)
    return report.build(data, now)


def load_report_data(gateways):
    """Fetch the five collections concurrently; any failure fails the whole load."""
    workers, departments, trades, trade_registers, training_registers = fetch_all(
        gateways["workers"].alist,
        gateways["departments"].alist,
        gateways["trades"].alist,
        gateways["trade-registers"].alist,
        gateways["training-registers"].alist,
    )
    return ReportData(workers, departments, trades, trade_registers, training_registers)
