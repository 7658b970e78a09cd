from __future__ import annotations

import io
from typing import Iterable

import pandas as pd

from .model import MonthReportRow

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

COLUMNS = [
    ("month", "Month"),
    ("workingDays", "Working Days"),
    ("totalBaseSalary", "Base Salary"),
    ("totalAllowance", "Allowance"),
    ("totalFare", "Fare"),
    ("totalOtherExpense", "Other Expenses"),
    ("grandTotal", "Grand Total"),
    ("target", "Target"),
    ("achieved", "Achieved Sales"),
    ("achievement", "Achievement"),
]
MONEY_COLUMNS = ("totalBaseSalary", "totalAllowance", "totalFare", "totalOtherExpense", "grandTotal", "target", "achieved")


def report_frame(rows: Iterable[MonthReportRow]) -> pd.DataFrame:
    df = pd.DataFrame([r.to_dict() for r in rows], columns=[key for key, _ in COLUMNS])
    for key in MONEY_COLUMNS:
        df[key] = pd.to_numeric(df[key])
    return df.rename(columns=dict(COLUMNS))


def export_six_month_report_xlsx(rows: Iterable[MonthReportRow]) -> bytes:
    df = report_frame(rows)
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Report")
    return out.getvalue()
