"""Budget spreadsheet parsing.

The budget sheet tracks hours and cost per person or feature. Expected
columns are ``Item``, ``Budgeted Hours``, ``Spent Hours``, ``Cost Per Hour``
and ``Status``; common spelling variants are accepted.
"""

import math
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd
import structlog

from flowguard.models import BudgetItem, BudgetStatus

logger = structlog.get_logger(__name__)

BUDGET_SHEET_NAME = "Budget"

COLUMN_ALIASES: Dict[str, tuple] = {
    "item": ("Item", "item", "ITEM", "Item Name", "item_name"),
    "budgeted_hours": (
        "Budgeted Hours",
        "Budgeted hours",
        "budgeted hours",
        "budgeted_hours",
        "BudgetedHours",
        "Budget Hours",
    ),
    "spent_hours": (
        "Spent Hours",
        "Spent hours",
        "spent hours",
        "spent_hours",
        "SpentHours",
        "Hours Spent",
    ),
    "cost_per_hour": (
        "Cost Per Hour",
        "Cost per Hour",
        "Cost per hour",
        "cost per hour",
        "cost_per_hour",
        "CostPerHour",
        "Rate",
        "Hourly Rate",
    ),
    "status": ("Status", "status", "STATUS"),
}


def load_workbook(path: Path) -> Dict[str, pd.DataFrame]:
    """Load every sheet of a workbook into DataFrames keyed by sheet name.

    A ``.csv`` file is read as a single sheet named ``Budget``.

    Args:
        path: Path to an ``.xlsx``, ``.xls`` or ``.csv`` file

    Returns:
        Mapping of sheet name to DataFrame, in workbook order
    """
    path = Path(path)
    if path.suffix.lower() == ".csv":
        return {BUDGET_SHEET_NAME: pd.read_csv(path)}
    return pd.read_excel(path, sheet_name=None)


def find_budget_sheet(sheet_names: List[str]) -> Optional[str]:
    """Pick the sheet holding the budget.

    Tries an exact ``Budget`` match, then a case-insensitive match, then any
    name containing "budget", then falls back to the first sheet.
    """
    if not sheet_names:
        return None
    if BUDGET_SHEET_NAME in sheet_names:
        return BUDGET_SHEET_NAME

    wanted = BUDGET_SHEET_NAME.lower()
    for name in sheet_names:
        if name.lower() == wanted:
            return name
    for name in sheet_names:
        if wanted in name.lower():
            return name
    return sheet_names[0]


def _lookup(row: Mapping[str, Any], field: str) -> Any:
    for alias in COLUMN_ALIASES[field]:
        if alias in row:
            value = row[alias]
            if not _is_blank(value):
                return value
    return None


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _to_number(value: Any) -> float:
    if _is_blank(value):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or number < 0:
        return 0.0
    return number


def parse_budget_rows(rows: List[Mapping[str, Any]]) -> List[BudgetItem]:
    """Convert sheet rows (column name to cell value) into budget items.

    Missing numbers default to 0 and a missing status to ``Active``. Rows
    with no item name and no budgeted or spent hours are dropped.
    """
    items = []
    for row in rows:
        label = _lookup(row, "item")
        budgeted = _to_number(_lookup(row, "budgeted_hours"))
        spent = _to_number(_lookup(row, "spent_hours"))

        name = "" if label is None else str(label).strip()
        if not name and budgeted == 0 and spent == 0:
            continue

        status = _lookup(row, "status")
        items.append(
            BudgetItem(
                item=name,
                budgeted_hours=budgeted,
                spent_hours=spent,
                cost_per_hour=_to_number(_lookup(row, "cost_per_hour")),
                status=BudgetStatus.parse(None if status is None else str(status)),
            )
        )
    return items


def parse_budget_sheet(workbook: Mapping[str, pd.DataFrame]) -> List[BudgetItem]:
    """Parse the budget sheet of a loaded workbook.

    Args:
        workbook: Mapping of sheet name to DataFrame, as from :func:`load_workbook`

    Returns:
        Budget items, or an empty list if the workbook has no sheets
    """
    sheet_name = find_budget_sheet(list(workbook.keys()))
    if sheet_name is None:
        logger.warning("budget_workbook_empty")
        return []

    frame = workbook[sheet_name]
    frame = frame.rename(columns=lambda c: str(c).strip())
    items = parse_budget_rows(frame.to_dict(orient="records"))
    logger.info("parsed_budget_sheet", sheet=sheet_name, items=len(items))
    return items
