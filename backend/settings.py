"""App-wide configuration: defaults for the input form, CORS and logging."""

from __future__ import annotations

import logging
import os
from typing import Callable, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from core.inputs import MAX_AMOUNT_DIGITS, RatePreset
from core.simulation import SimulationParams

ENV_PREFIX = "SIMULATOR_"
LOGGER_NAMESPACES = ("app", "api", "core")
HANDLER_NAME = "simulator"


class ConfigurationError(Exception):
    """Raised when an environment override cannot be applied."""


def default_params() -> SimulationParams:
    return SimulationParams(initialAmount=0, monthlyAmount=30000, annualRate=5, durationYears=20)


def default_presets() -> List[RatePreset]:
    return [
        RatePreset(label="3% (安定)", value=3),
        RatePreset(label="5% (標準)", value=5),
        RatePreset(label="7% (積極)", value=7),
    ]


class Settings(BaseModel):
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]
    )
    default_params: SimulationParams = Field(default_factory=default_params)
    rate_presets: List[RatePreset] = Field(default_factory=default_presets)
    max_amount_digits: int = Field(MAX_AMOUNT_DIGITS, ge=1, le=MAX_AMOUNT_DIGITS)
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


# env suffix -> (settings field, parser)
_TOP_LEVEL: Dict[str, tuple[str, Callable[[str], object]]] = {
    "LOG_LEVEL": ("log_level", str.upper),
    "LOG_FORMAT": ("log_format", str),
    "CORS_ORIGINS": ("cors_origins", _split_origins),
    "MAX_AMOUNT_DIGITS": ("max_amount_digits", int),
}

# env suffix -> SimulationParams field
_DEFAULT_PARAMS: Dict[str, str] = {
    "DEFAULT_INITIAL_AMOUNT": "initialAmount",
    "DEFAULT_MONTHLY_AMOUNT": "monthlyAmount",
    "DEFAULT_ANNUAL_RATE": "annualRate",
    "DEFAULT_DURATION_YEARS": "durationYears",
}


def load_settings(environ: Optional[Mapping[str, str]] = None, prefix: str = ENV_PREFIX) -> Settings:
    """
    Build Settings, letting environment variables override the defaults.

    Raises ConfigurationError when an override is malformed.
    """
    env = os.environ if environ is None else environ
    overrides: Dict[str, object] = {}

    for suffix, (field, parse) in _TOP_LEVEL.items():
        raw = env.get(prefix + suffix)
        if raw is None:
            continue
        try:
            overrides[field] = parse(raw)
        except ValueError as exc:
            raise ConfigurationError(f"{prefix + suffix}: {exc}") from exc

    params = default_params().model_dump()
    for suffix, field in _DEFAULT_PARAMS.items():
        raw = env.get(prefix + suffix)
        if raw is not None:
            params[field] = raw
    overrides["default_params"] = params

    try:
        settings = Settings.model_validate(overrides)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc

    if logging.getLevelName(settings.log_level) == f"Level {settings.log_level}":
        raise ConfigurationError(f"unknown log level: {settings.log_level}")
    return settings


def configure_logging(settings: Settings) -> None:
    """Attach one stream handler to each of the backend's logger namespaces."""
    formatter = logging.Formatter(settings.log_format)
    for name in LOGGER_NAMESPACES:
        logger = logging.getLogger(name)
        logger.setLevel(settings.log_level)

        handler = next((h for h in logger.handlers if h.get_name() == HANDLER_NAME), None)
        if handler is None:
            handler = logging.StreamHandler()
            handler.set_name(HANDLER_NAME)
            logger.addHandler(handler)
        handler.setFormatter(formatter)
