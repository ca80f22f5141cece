"""Compound-growth projection for a monthly savings plan."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


class SimulationError(ValueError):
    """Raised when a projection cannot produce a summary."""


class EmptyProjectionError(SimulationError):
    def __init__(self, duration_years: int):
        super().__init__(f"durationYears must be at least 1 (got {duration_years})")
        self.duration_years = duration_years


class SimulationParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    initialAmount: int
    monthlyAmount: int
    annualRate: float
    durationYears: int


class YearData(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    totalAmount: int
    totalPrincipal: int
    totalProfit: int
    # calendar year for display only, None when no reference year was given
    displayYear: Optional[int] = None


class SimulationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    params: SimulationParams
    finalAmount: int
    totalPrincipal: int
    totalProfit: int
    profitPercent: float
    yearlyData: List[YearData]


def round_half_up(value: float, places: int = 0) -> Decimal:
    """
    Round with ROUND_HALF_UP (ties go away from zero).

    Every monetary field and the profit percentage go through this helper so
    fixtures only have to agree on one convention. Precision grows with the
    magnitude of value, so long horizons at high rates round instead of
    raising InvalidOperation.
    """
    exact = Decimal(repr(value))
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + places + 2)
        return exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def monthly_rate(annual_rate: float) -> float:
    """Nominal annual percentage (5 means 5%) -> per-month decimal rate."""
    return annual_rate / 100 / MONTHS_PER_YEAR


def future_value(initial: float, monthly: float, rate: float, months: int) -> float:
    """
    Future value of a lump sum plus an ordinary annuity of monthly payments.

    With rate == 0 this degrades to plain accumulation.
    """
    if rate == 0:
        return initial + monthly * months

    growth = (1 + rate) ** months
    fv_initial = initial * growth
    fv_monthly = monthly * ((growth - 1) / rate)
    return fv_initial + fv_monthly


def project_years(
    params: SimulationParams,
    reference_year: Optional[int] = None,
) -> List[YearData]:
    """
    Build one snapshot per elapsed year 1..durationYears.

    Each year is recomputed from the inputs (no running balance), so a
    snapshot can be reproduced on its own. A non-positive duration gives an
    empty list.
    """
    rate = monthly_rate(params.annualRate)

    rows: List[YearData] = []
    for year in range(1, params.durationYears + 1):
        months = year * MONTHS_PER_YEAR

        total_amount = int(
            round_half_up(future_value(params.initialAmount, params.monthlyAmount, rate, months))
        )
        total_principal = int(round_half_up(params.initialAmount + params.monthlyAmount * months))

        rows.append(
            YearData(
                year=year,
                totalAmount=total_amount,
                totalPrincipal=total_principal,
                # from the rounded values so amount == principal + profit exactly
                totalProfit=total_amount - total_principal,
                displayYear=reference_year + year if reference_year is not None else None,
            )
        )

    return rows


def profit_percent(total_profit: int, total_principal: int) -> float:
    """Profit relative to principal in percent, one decimal place."""
    if total_principal == 0:
        # nothing paid in: report 0% instead of dividing by zero
        return 0.0
    return float(round_half_up(total_profit / total_principal * 100, places=1))


def run_simulation(
    params: SimulationParams,
    reference_year: Optional[int] = None,
) -> SimulationResult:
    """
    Project the plan and summarise the final year.

    Raises EmptyProjectionError when durationYears < 1, since there is no
    final year to summarise.
    """
    yearly = project_years(params, reference_year=reference_year)
    if not yearly:
        raise EmptyProjectionError(params.durationYears)

    final = yearly[-1]
    result = SimulationResult(
        params=params,
        finalAmount=final.totalAmount,
        totalPrincipal=final.totalPrincipal,
        totalProfit=final.totalProfit,
        profitPercent=profit_percent(final.totalProfit, final.totalPrincipal),
        yearlyData=yearly,
    )
    logger.debug(
        "simulation years=%d rate=%s final=%d profit=%.1f%%",
        params.durationYears,
        params.annualRate,
        result.finalAmount,
        result.profitPercent,
    )
    return result


__all__ = [
    "MONTHS_PER_YEAR",
    "SimulationError",
    "EmptyProjectionError",
    "SimulationParams",
    "YearData",
    "SimulationResult",
    "round_half_up",
    "monthly_rate",
    "future_value",
    "project_years",
    "profit_percent",
    "run_simulation",
]
