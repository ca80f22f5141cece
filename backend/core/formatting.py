"""Display helpers for simulation results: yen strings, axis labels, table and chart rows."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from core.simulation import SimulationResult, round_half_up

YEN_SIGN = "￥"

OKU = 100_000_000
SEN_MAN = 10_000_000
MAN = 10_000


class TableRow(BaseModel):
    year: int
    totalAmount: int
    totalProfit: int
    isLast: bool


class ChartPoint(BaseModel):
    # principal and profit are stacked; together they make total
    name: str
    principal: int
    profit: int
    total: int
    # compressed y-axis text for total, e.g. "1.2億円"
    axisLabel: str


def format_number(amount: float) -> str:
    return f"{int(round_half_up(amount)):,}"


def format_currency(amount: float) -> str:
    """Whole yen with grouping, e.g. ￥1,234,567 / -￥500."""
    value = int(round_half_up(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{YEN_SIGN}{format_number(abs(value))}"


def format_axis_label(value: float) -> str:
    """Compress large magnitudes for the y axis (億円 / 千万 / 万)."""
    if value >= OKU:
        return f"{round_half_up(value / OKU, 1)}億円"
    if value >= SEN_MAN:
        return f"{round_half_up(value / SEN_MAN)}千万"
    if value >= MAN:
        return f"{round_half_up(value / MAN)}万"
    return str(int(value)) if float(value).is_integer() else str(value)


def display_years(duration_years: int, points: int = 5) -> List[int]:
    """
    Pick the years shown in the summary table.

    Short horizons show every year. Longer ones show the first and last year
    and evenly spaced years in between.
    """
    if duration_years <= 0:
        return []
    if duration_years <= points:
        return list(range(1, duration_years + 1))

    step = (duration_years - 1) / (points - 1)
    years = {1, duration_years}
    for k in range(1, points - 1):
        years.add(int(round_half_up(1 + step * k)))
    return sorted(years)


def summary_table(result: SimulationResult, points: int = 5) -> List[TableRow]:
    by_year = {row.year: row for row in result.yearlyData}
    last_year = result.params.durationYears

    rows: List[TableRow] = []
    for year in display_years(last_year, points=points):
        data = by_year.get(year)
        if data is None:
            continue
        rows.append(
            TableRow(
                year=year,
                totalAmount=data.totalAmount,
                totalProfit=data.totalProfit,
                isLast=year == last_year,
            )
        )
    return rows


def chart_series(result: SimulationResult) -> List[ChartPoint]:
    return [
        ChartPoint(
            name=f"{row.year}年",
            principal=row.totalPrincipal,
            profit=row.totalProfit,
            total=row.totalAmount,
            axisLabel=format_axis_label(row.totalAmount),
        )
        for row in result.yearlyData
    ]


def tick_interval(point_count: int) -> int:
    """Label every n-th x-axis tick so roughly four labels remain."""
    return point_count // 4
