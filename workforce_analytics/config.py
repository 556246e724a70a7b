"""
Engine options.

Callers pass options as plain mappings (camelCase, as the dashboard layer
sends them) or as these models directly.
"""

from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_CURRENCY = "USD"
DEFAULT_LOOKBACK_PERIODS = 6
DEFAULT_FORECAST_HORIZON = 1
DEFAULT_PAYOUT_WINDOW_DAYS = 14


class ForecastOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    lookback_periods: int = Field(DEFAULT_LOOKBACK_PERIODS, gt=0, alias='lookbackPeriods')
    forecast_horizon: int = Field(DEFAULT_FORECAST_HORIZON, ge=0, alias='forecastHorizon')


class SummaryOptions(BaseModel):
    """Options accepted by the summary entry point."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    base_currency: Optional[str] = Field(None, alias='baseCurrency')
    # Keys and values stay raw; the rate table builder drops the unusable ones
    currency_rates: Optional[Dict[Any, Any]] = Field(None, alias='currencyRates')
    forecast_options: ForecastOptions = Field(default_factory=ForecastOptions, alias='forecastOptions')
    fallback_currency: str = Field(DEFAULT_BASE_CURRENCY, alias='fallbackCurrency')
    payout_window_days: int = Field(DEFAULT_PAYOUT_WINDOW_DAYS, ge=0, alias='payoutWindowDays')
    reference_date: Optional[date] = Field(None, alias='referenceDate')

    @field_validator('forecast_options', mode='before')
    @classmethod
    def _default_forecast_options(cls, value: Any) -> Any:
        return ForecastOptions() if value is None else value

    @classmethod
    def coerce(cls, options: Any = None) -> 'SummaryOptions':
        """Build options from None, a mapping, or an existing instance."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(options)
