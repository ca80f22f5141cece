"""HTTP routes for the Flask API."""

import logging
from datetime import datetime
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from core.formatting import chart_series, format_currency, summary_table, tick_interval
from core.inputs import params_from_form
from core.simulation import SimulationError, SimulationResult, run_simulation
from schemas.simulation import (
    DefaultsResponse,
    FormattedSummary,
    PingResponse,
    SimulationFormRequest,
    SimulationRequest,
    SimulationResponse,
)
from settings import Settings

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _settings() -> Settings:
    return current_app.config["SETTINGS"]


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        raise BadRequest("request body must be a JSON object")
    return payload


def build_response(result: SimulationResult) -> SimulationResponse:
    """Bundle the engine result with the table, chart and yen strings the frontend shows."""
    chart = chart_series(result)
    return SimulationResponse(
        result=result,
        table=summary_table(result),
        chart=chart,
        tickInterval=tick_interval(len(chart)),
        formatted=FormattedSummary(
            finalAmount=format_currency(result.finalAmount),
            totalPrincipal=format_currency(result.totalPrincipal),
            totalProfit=format_currency(result.totalProfit),
            initialAmount=format_currency(result.params.initialAmount),
            monthlyAmount=format_currency(result.params.monthlyAmount),
        ),
    )


def _simulate(payload: SimulationRequest) -> Any:
    result = run_simulation(payload.to_params(), reference_year=datetime.now().year)
    logger.info(
        "simulation durationYears=%d annualRate=%s finalAmount=%d",
        payload.durationYears,
        payload.annualRate,
        result.finalAmount,
    )
    return jsonify(build_response(result).model_dump())


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.warning("rejected payload: %d validation error(s)", exc.error_count())
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(SimulationError)
def _handle_simulation_error(exc: SimulationError):
    logger.warning("simulation failed: %s", exc)
    return jsonify({"detail": str(exc)}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(BadRequest)
def _handle_bad_request(exc: BadRequest):
    return jsonify({"detail": exc.description}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong")
    return jsonify(response.model_dump())


@api_bp.get("/simulation/defaults")
def simulation_defaults() -> Any:
    """Initial form values and rate presets."""
    settings = _settings()
    response = DefaultsResponse(
        params=settings.default_params,
        presets=settings.rate_presets,
        maxAmountDigits=settings.max_amount_digits,
    )
    return jsonify(response.model_dump())


@api_bp.post("/simulation")
def simulation() -> Any:
    """Run a projection from already-numeric parameters."""
    payload = SimulationRequest.model_validate(_json_body())
    return _simulate(payload)


@api_bp.post("/simulation/form")
def simulation_form() -> Any:
    """Run a projection from raw form text (commas, full-width digits, blanks)."""
    form = SimulationFormRequest.model_validate(_json_body())
    params = params_from_form(form.model_dump(), max_digits=_settings().max_amount_digits)
    payload = SimulationRequest.model_validate(params.model_dump())
    return _simulate(payload)
