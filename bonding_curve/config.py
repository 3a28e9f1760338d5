"""Configuration for the bonding-curve engine."""

import logging
import os
from dataclasses import dataclass

import structlog

from bonding_curve.constants import COLLATERAL_UNIT, DEFAULT_BISECTION_ITERATIONS


@dataclass(frozen=True)
class CurveConfig:
    """Centralized configuration for pricing and validation.

    The estimator and the validator must run with the same configuration,
    otherwise they round to different collateral units and disagree on
    which transitions are acceptable.

    Attributes:
        collateral_unit: Base units per whole collateral coin (default: 10^8)
        bisection_iterations: Fixed iteration count for the purchase-amount
            solver (default: 50)
    """

    collateral_unit: int = COLLATERAL_UNIT
    bisection_iterations: int = DEFAULT_BISECTION_ITERATIONS

    def __post_init__(self) -> None:
        if self.collateral_unit <= 0:
            raise ValueError(f"collateral_unit must be positive, got {self.collateral_unit}")
        if self.bisection_iterations <= 0:
            raise ValueError(
                f"bisection_iterations must be positive, got {self.bisection_iterations}"
            )


# Default configuration instance
DEFAULT_CURVE_CONFIG = CurveConfig()

# Service settings from environment variables with sensible defaults
HOST = os.environ.get("BONDING_CURVE_HOST", "0.0.0.0")
PORT = int(os.environ.get("BONDING_CURVE_PORT", "8000"))
DEBUG = os.environ.get("BONDING_CURVE_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("BONDING_CURVE_LOG_LEVEL", "INFO").upper()


def configure_logging(level: int | str = LOG_LEVEL) -> None:
    """Configure structlog for console output at the given level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


__all__ = [
    "CurveConfig",
    "DEFAULT_CURVE_CONFIG",
    "HOST",
    "PORT",
    "DEBUG",
    "LOG_LEVEL",
    "configure_logging",
]
