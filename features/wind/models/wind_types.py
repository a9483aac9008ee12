from datetime import datetime, timezone
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so provider and caller times compare."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

class WindValues(BaseModel):
    """Wind fields of a single hourly forecast sample."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    wind_speed: Optional[float] = Field(None, alias="windSpeed")
    wind_direction: Optional[float] = Field(None, alias="windDirection", description="Degrees clockwise from true N, direction wind blows from")

class HourlySample(BaseModel):
    """One entry of the provider's hourly timeline."""
    model_config = ConfigDict(extra="ignore")

    time: datetime
    values: WindValues = Field(default_factory=WindValues)

    @field_validator("time")
    @classmethod
    def _normalize_time(cls, value: datetime) -> datetime:
        return as_utc(value)

class ForecastRequest(BaseModel):
    """Body of POST /forecast."""
    model_config = ConfigDict(populate_by_name=True)

    coordinates: List[Tuple[float, float]] = Field(..., description="Route as [[lat, lon], ...] in travel order")
    target_time: datetime = Field(..., alias="timeISO", description="ISO-8601 time to pick the forecast sample for")

    @field_validator("target_time")
    @classmethod
    def _normalize_target_time(cls, value: datetime) -> datetime:
        return as_utc(value)

class ForecastPoint(BaseModel):
    """Wind forecast and impact at one route coordinate."""
    model_config = ConfigDict(populate_by_name=True)

    lat: float
    lon: float
    wind_speed: float = Field(..., alias="windSpeed")
    wind_direction: float = Field(..., alias="windDirection")
    bearing: float = Field(..., description="Bearing to the next coordinate, 0 for the last one")
    impact: float = Field(..., description="Wind speed component along the travel bearing")

class ErrorResponse(BaseModel):
    error: str
