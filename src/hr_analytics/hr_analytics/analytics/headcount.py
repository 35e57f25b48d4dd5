"""Headcount read-models computed from the employee table.

"Active as of a day" is derived from the join/exit dates, not from the stored
lifecycle status, so reports stay right even before the lifecycle job runs.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from statistics import median
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import add_months, end_of_month, start_of_month
from ..core.constants import LEVELS
from ..employees.model import Employee


@dataclass(frozen=True)
class FinancialYear:
    start: date
    end: date
    label: str


@dataclass(frozen=True)
class TrendPoint:
    month: str
    month_start: date
    headcount: int
    is_projection: bool
    is_connector: bool = False

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "monthStart": self.month_start.isoformat(),
            "headcount": self.headcount,
            "isProjection": self.is_projection,
            "isConnector": self.is_connector,
        }


def is_active_as_of(employee: Employee, as_of: date) -> bool:
    if employee.date_of_joining is None or employee.date_of_joining > as_of:
        return False
    if employee.date_of_exit is None:
        return True
    return employee.date_of_exit > as_of


def is_active_at_end_of_month(employee: Employee, month: date) -> bool:
    return is_active_as_of(employee, end_of_month(month))


def active_as_of(employees: Iterable[Employee], as_of: date) -> list[Employee]:
    return [e for e in employees if is_active_as_of(e, as_of)]


def headcount_as_of(employees: Iterable[Employee], as_of: date, *, level: Optional[str] = None) -> int:
    return sum(1 for e in employees if (level is None or e.level == level) and is_active_as_of(e, as_of))


def level_headcount(employees: Sequence[Employee], as_of: date) -> dict[str, int]:
    counts = {lvl: 0 for lvl in LEVELS}
    for e in active_as_of(employees, as_of):
        key = e.level or "Unassigned"
        counts[key] = counts.get(key, 0) + 1
    return counts


def _joined_between(employees: Iterable[Employee], first: date, last: date) -> list[Employee]:
    return [e for e in employees if e.date_of_joining is not None and first <= e.date_of_joining <= last]


def _exited_between(employees: Iterable[Employee], first: date, last: date) -> list[Employee]:
    return [e for e in employees if e.date_of_exit is not None and first <= e.date_of_exit <= last]


def additions_in_month(employees: Iterable[Employee], month: date) -> list[Employee]:
    return _joined_between(employees, start_of_month(month), end_of_month(month))


def exits_in_month(employees: Iterable[Employee], month: date) -> list[Employee]:
    return _exited_between(employees, start_of_month(month), end_of_month(month))


def additions_up_to(employees: Iterable[Employee], month: date, up_to: date) -> list[Employee]:
    return _joined_between(employees, start_of_month(month), up_to)


def exits_up_to(employees: Iterable[Employee], month: date, up_to: date) -> list[Employee]:
    return _exited_between(employees, start_of_month(month), up_to)


def financial_year_range(on: date) -> FinancialYear:
    """Indian financial year (April to March) containing ``on``."""
    first_year = on.year if on.month >= 4 else on.year - 1
    return FinancialYear(
        start=date(first_year, 4, 1),
        end=date(first_year + 1, 3, 31),
        label=f"FY {first_year}-{str(first_year + 1)[-2:]}",
    )


def headcount_trend(
    employees: Sequence[Employee],
    fy: FinancialYear,
    *,
    today: date,
    levels: Optional[Sequence[str]] = None,
) -> list[TrendPoint]:
    """Month-end headcount for each month of the financial year.

    Months ending after ``today`` are projections (known joins/exits only);
    the last completed month is flagged as the connector between the two.
    """
    selected = [e for e in employees if levels is None or e.level in levels]
    months = [add_months(fy.start, i) for i in range(12)]
    last_historical = max((i for i, m in enumerate(months) if end_of_month(m) <= today), default=-1)

    points: list[TrendPoint] = []
    for i, month in enumerate(months):
        points.append(
            TrendPoint(
                month=month.strftime("%b"),
                month_start=month,
                headcount=sum(1 for e in selected if is_active_at_end_of_month(e, month)),
                is_projection=end_of_month(month) > today,
                is_connector=i == last_historical,
            )
        )
    return points


def gender_split(employees: Sequence[Employee]) -> dict:
    total = len(employees)
    female = sum(1 for e in employees if (e.gender or "").strip().lower() == "female")
    male = sum(1 for e in employees if (e.gender or "").strip().lower() == "male")

    def pct(n: int) -> float:
        return round(n * 100.0 / total, 1) if total else 0.0

    return {
        "female": female,
        "male": male,
        "femalePercent": pct(female),
        "malePercent": pct(male),
    }


def median_tenure_years(employees: Sequence[Employee], as_of: date) -> float:
    tenures = [
        (as_of - e.date_of_joining).days / 365
        for e in employees
        if e.date_of_joining is not None
    ]
    if not tenures:
        return 0.0
    return float(median(tenures))
