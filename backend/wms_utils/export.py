from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="8B4513", end_color="8B4513", fill_type="solid")


def _cell_value(value):
    if isinstance(value, (list, dict)):
        return str(value)
    return value


def rows_to_workbook(rows, columns, title="Report"):
    """Write rows into a single-sheet workbook, one column per ``{"key", "label"}``."""
    wb = Workbook()
    ws = wb.active
    ws.title = title[:31]  # Excel limit

    for col, column in enumerate(columns, start=1):
        cell = ws.cell(row=1, column=col, value=column["label"])
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL

    for row_index, row in enumerate(rows, start=2):
        for col, column in enumerate(columns, start=1):
            ws.cell(row=row_index, column=col, value=_cell_value(row.get(column["key"])))

    for col, column in enumerate(columns, start=1):
        width = max([len(str(column["label"]))] + [len(str(r.get(column["key"], ""))) for r in rows])
        ws.column_dimensions[get_column_letter(col)].width = min(width + 2, 60)

    ws.freeze_panes = "A2"
    return wb


def export_rows(rows, columns, title="Report"):
    """Serialise rows to ``.xlsx`` bytes."""
    buffer = BytesIO()
    rows_to_workbook(rows, columns, title).save(buffer)
    buffer.seek(0)
    return buffer
