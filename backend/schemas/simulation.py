"""Data contracts for the simulation endpoints."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.formatting import ChartPoint, TableRow
from core.inputs import MAX_AMOUNT_DIGITS, RatePreset
from core.simulation import SimulationParams, SimulationResult

MAX_AMOUNT = 10**MAX_AMOUNT_DIGITS - 1


class SimulationRequest(BaseModel):
    """Parameters accepted from clients before they reach the engine."""

    model_config = ConfigDict(extra="forbid")

    initialAmount: int = Field(0, ge=0, le=MAX_AMOUNT, description="Lump sum at time zero (yen).")
    monthlyAmount: int = Field(0, ge=0, le=MAX_AMOUNT, description="Contribution at the end of each month (yen).")
    annualRate: float = Field(
        0.0,
        ge=0,
        le=100,
        description="Nominal annual rate in percent (5 means 5%).",
    )
    durationYears: int = Field(..., ge=1, le=100, description="Number of years to project.")

    def to_params(self) -> SimulationParams:
        return SimulationParams(**self.model_dump())


class SimulationFormRequest(BaseModel):
    """Raw text as typed into the input form."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    initialAmount: Optional[str] = None
    monthlyAmount: Optional[str] = None
    annualRate: Optional[str] = None
    durationYears: Optional[str] = None


class FormattedSummary(BaseModel):
    finalAmount: str
    totalPrincipal: str
    totalProfit: str
    initialAmount: str
    monthlyAmount: str


class SimulationResponse(BaseModel):
    result: SimulationResult
    table: List[TableRow]
    chart: List[ChartPoint]
    tickInterval: int
    formatted: FormattedSummary


class DefaultsResponse(BaseModel):
    params: SimulationParams
    presets: List[RatePreset]
    maxAmountDigits: int = Field(..., ge=1)


class PingResponse(BaseModel):
    message: str
