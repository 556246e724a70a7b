"""
Utilization forecasting from capacity snapshots.

Fits an ordinary least-squares trend line over the most recent snapshots
and projects it a fixed number of periods ahead. The projection is bounded
to the 0-100% range and classified into a trend with a +/-0.5 deadband so
that near-zero slopes do not flap between upward and downward.
"""

from typing import Any, Dict, Iterable, List, Optional
from dataclasses import dataclass
import math

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error

from ..config import DEFAULT_FORECAST_HORIZON, DEFAULT_LOOKBACK_PERIODS
from ..logging_config import get_logger
from ..numbers import parse_timestamp, round_half_up, to_finite_number
from ..records import as_snapshot

logger = get_logger(__name__)

TREND_THRESHOLD = 0.5
MIN_UTILIZATION = 0.0
MAX_UTILIZATION = 100.0


@dataclass(frozen=True)
class ForecastResult:
    """Result of a utilization forecast."""
    forecasted_utilization_percent: Optional[float]
    slope_per_period: float
    trend: str
    samples: int
    confidence_metrics: Optional[Dict[str, float]] = None

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'forecasted_utilization_percent': self.forecasted_utilization_percent,
            'slope_per_period': self.slope_per_period,
            'trend': self.trend,
            'samples': self.samples,
            'confidence_metrics': dict(self.confidence_metrics) if self.confidence_metrics else None
        }


def classify_trend(slope: float) -> str:
    """Map a slope onto 'upward', 'downward' or 'flat'."""
    if slope > TREND_THRESHOLD:
        return 'upward'
    if slope < -TREND_THRESHOLD:
        return 'downward'
    return 'flat'


def clamp_utilization(value: float) -> float:
    return min(MAX_UTILIZATION, max(MIN_UTILIZATION, value))


class UtilizationForecaster:
    """
    Linear-trend forecaster over capacity snapshots.

    Each call to ``forecast`` works on its own copy of the snapshots; the
    forecaster only carries its configuration.
    """

    def __init__(self,
                 lookback_periods: int = DEFAULT_LOOKBACK_PERIODS,
                 forecast_horizon: int = DEFAULT_FORECAST_HORIZON):
        """
        Initialize forecaster.

        Args:
            lookback_periods: Number of most recent snapshots to fit on
            forecast_horizon: Periods past the last snapshot to project to
        """
        if lookback_periods < 1:
            raise ValueError("lookback_periods must be at least 1")
        if forecast_horizon < 0:
            raise ValueError("forecast_horizon must not be negative")

        self.lookback_periods = lookback_periods
        self.forecast_horizon = forecast_horizon

    def prepare_history(self, capacity_snapshots: Iterable[Any]) -> pd.DataFrame:
        """
        Build the fitting window from raw snapshots.

        Snapshots without a finite utilization or a parseable date are
        dropped. The rest are sorted chronologically (stable for equal
        dates) and cut to the lookback window.

        Args:
            capacity_snapshots: Snapshots (instances or mappings)

        Returns:
            DataFrame with columns ['recorded_for', 'utilization_percent']
        """
        rows: List[Dict[str, Any]] = []
        skipped = 0
        for raw in capacity_snapshots or ():
            snapshot = as_snapshot(raw)
            utilization = to_finite_number(snapshot.utilization_percent)
            recorded_for = parse_timestamp(snapshot.recorded_for)
            if utilization is None or recorded_for is None:
                skipped += 1
                continue
            rows.append({'recorded_for': recorded_for, 'utilization_percent': utilization})

        if skipped:
            logger.debug("Skipped %d unusable capacity snapshots", skipped)

        history = pd.DataFrame(rows, columns=['recorded_for', 'utilization_percent'])
        history = history.sort_values('recorded_for', kind='mergesort').reset_index(drop=True)
        return history.tail(self.lookback_periods).reset_index(drop=True)

    def forecast(self, capacity_snapshots: Iterable[Any]) -> ForecastResult:
        """
        Forecast utilization for the configured horizon.

        Args:
            capacity_snapshots: Snapshots (instances or mappings)

        Returns:
            ForecastResult with the bounded projection and trend
        """
        history = self.prepare_history(capacity_snapshots)
        values = history['utilization_percent'].to_numpy(dtype=float)
        samples = len(values)

        if samples == 0:
            return ForecastResult(
                forecasted_utilization_percent=None,
                slope_per_period=0.0,
                trend='flat',
                samples=0
            )

        if samples == 1:
            return ForecastResult(
                forecasted_utilization_percent=round_half_up(clamp_utilization(float(values[0])), 2),
                slope_per_period=0.0,
                trend='flat',
                samples=1
            )

        slope, intercept = self._fit_trend(values)

        projected = intercept + slope * (samples + self.forecast_horizon)
        if not math.isfinite(projected):
            projected = float(values[-1])

        return ForecastResult(
            forecasted_utilization_percent=round_half_up(clamp_utilization(projected), 2),
            slope_per_period=round_half_up(slope, 4),
            trend=classify_trend(slope),
            samples=samples,
            confidence_metrics=self._fit_metrics(values, slope, intercept)
        )

    def _fit_trend(self, values: np.ndarray) -> tuple:
        """Closed-form least squares over x = 1..n. Returns (slope, intercept)."""
        n = len(values)
        x = np.arange(1, n + 1, dtype=float)

        with np.errstate(over='ignore', invalid='ignore'):
            sum_x = float(x.sum())
            sum_y = float(values.sum())
            sum_xy = float((x * values).sum())
            sum_x2 = float((x * x).sum())

        denominator = n * sum_x2 - sum_x ** 2
        slope = (n * sum_xy - sum_x * sum_y) / denominator if denominator != 0 else 0.0
        intercept = (sum_y - slope * sum_x) / n

        # Overflowing sums fit like the degenerate case
        if not (math.isfinite(slope) and math.isfinite(intercept)):
            slope = 0.0
            intercept = sum_y / n
        return slope, intercept

    def _fit_metrics(self, values: np.ndarray, slope: float, intercept: float) -> Optional[Dict[str, float]]:
        """In-sample error of the fitted line, or None when it cannot be measured."""
        x = np.arange(1, len(values) + 1, dtype=float)
        fitted = intercept + slope * x
        if not np.isfinite(fitted).all():
            return None

        with np.errstate(over='ignore', invalid='ignore'):
            mae = float(mean_absolute_error(values, fitted))
            rmse = float(np.sqrt(mean_squared_error(values, fitted)))
        if not (math.isfinite(mae) and math.isfinite(rmse)):
            return None

        return {
            'mae': round_half_up(float(mae), 4),
            'rmse': round_half_up(float(rmse), 4)
        }


def compute_utilization_forecast(capacity_snapshots: Iterable[Any],
                                 lookback_periods: int = DEFAULT_LOOKBACK_PERIODS,
                                 forecast_horizon: int = DEFAULT_FORECAST_HORIZON) -> ForecastResult:
    """Functional shortcut for ``UtilizationForecaster(...).forecast(...)``."""
    forecaster = UtilizationForecaster(lookback_periods, forecast_horizon)
    return forecaster.forecast(capacity_snapshots)
