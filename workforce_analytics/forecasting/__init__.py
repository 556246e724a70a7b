"""
Forecasting module for utilization trend prediction.
"""

from .models import ForecastResult, UtilizationForecaster, classify_trend, compute_utilization_forecast

__all__ = ["ForecastResult", "UtilizationForecaster", "classify_trend", "compute_utilization_forecast"]
