"""
Common schemas shared by every DTO module
"""
import calendar
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from atams.schemas import DataResponse, PaginationResponse

# Form lists default to the last two months when no range is given
DEFAULT_WINDOW_MONTHS = 2


def months_before(day: date, months: int) -> date:
    """Same day `months` earlier, clamped to the end of a shorter month"""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def wall_clock(value: Optional[datetime]) -> Optional[datetime]:
    """Drop the offset and keep the local time as written (09:00+08:00 -> 09:00)"""
    if value is None or value.tzinfo is None:
        return value
    return value.replace(tzinfo=None)


class CamelModel(BaseModel):
    """Serializes with camelCase keys, accepts both spellings on input"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FieldViolation(BaseModel):
    """One field-level validation failure"""
    field: str
    message: str
    type: str


__all__ = ["CamelModel", "wall_clock", "FieldViolation", "DataResponse", "PaginationResponse"]
