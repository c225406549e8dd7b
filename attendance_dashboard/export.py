import os
from datetime import date

import pandas as pd
from openpyxl import load_workbook
from openpyxl.styles import PatternFill, Alignment, Font, Border, Side
from openpyxl.worksheet.page import PageMargins

from attendance_dashboard.constants import CSV_HEADER, EXPORTS_FOLDER
from attendance_dashboard.exceptions import EmptySnapshotError
from attendance_dashboard.parser import NaiveCsvParser


def default_filename(extension="csv", today=None):
    today = today or date.today()
    return f"attendance_{today.isoformat()}.{extension}"


def default_path(extension="csv", today=None, folder=EXPORTS_FOLDER):
    return os.path.join(folder, default_filename(extension, today))


def _prepare(path):
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)


def export_csv(records, path, parser=None):
    if not records:
        raise EmptySnapshotError("No data to export")

    parser = parser or NaiveCsvParser()
    _prepare(path)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(parser.format(records))
    return path


def export_excel(records, path):
    if not records:
        raise EmptySnapshotError("No data to export")

    _prepare(path)
    rows = [
        [r.uid, r.name, r.contact, "Present" if r.is_present else "Absent"]
        for r in records
    ]
    df = pd.DataFrame(rows, columns=list(CSV_HEADER))
    df.to_excel(path, index=False, engine="openpyxl")

    wb = load_workbook(path)
    ws = wb.active
    ws.title = "Attendance"

    header_fill = PatternFill("solid", start_color="D3D3D3")
    present_fill = PatternFill("solid", start_color="C6EFCE")
    absent_fill = PatternFill("solid", start_color="FFC7CE")

    header_font = Font(bold=True, size=12)
    data_font = Font(size=11)

    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    center = Alignment(horizontal="center", vertical="center")

    for col_idx in range(1, len(CSV_HEADER) + 1):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = header_font
        cell.alignment = center
        cell.border = border
        cell.fill = header_fill

    for row in ws.iter_rows(min_row=2, max_row=ws.max_row, min_col=1, max_col=len(CSV_HEADER)):
        for cell in row:
            cell.font = data_font
            cell.alignment = center
            cell.border = border
        status_cell = row[-1]
        status_cell.fill = present_fill if status_cell.value == "Present" else absent_fill

    ws.column_dimensions["A"].width = 12
    ws.column_dimensions["B"].width = 28
    ws.column_dimensions["C"].width = 20
    ws.column_dimensions["D"].width = 14

    ws.page_margins = PageMargins(
        left=0.3, right=0.3,
        top=0.4, bottom=0.4,
        header=0.3, footer=0.3
    )
    ws.page_setup.orientation = ws.ORIENTATION_LANDSCAPE
    ws.page_setup.paperSize = ws.PAPERSIZE_A4
    ws.page_setup.fitToWidth = 1
    ws.page_setup.fitToHeight = 0

    wb.save(path)
    return path
