"""
Attendance Schemas for clock-card rows and daily records
"""
import re
from typing import Any, Mapping, Optional
from datetime import datetime, date

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from hrsystem.schemas.common import CamelModel
from hrsystem.core.attendance_status import (
    NOT_CLOCKED_LABEL,
    display_status,
    requires_follow_up,
)

CARD_TYPE_CLOCK_IN = 0
CARD_TYPE_CLOCK_OUT = 1

# HR store writes 1900-01-01 for a missing punch
SENTINEL_YEAR = 1900

DATE_DISPLAY_FORMAT = "%Y/%m/%d"
TIME_DISPLAY_FORMAT = "%Y/%m/%d %H:%M:%S"


def has_valid_punch(value: Optional[datetime]) -> bool:
    return value is not None and value.year > SENTINEL_YEAR


class CardDataMatch(BaseModel):
    """Raw clock-card row (vwZZ_CARD_DATA_MATCH)"""
    model_config = ConfigDict(from_attributes=True)

    employee_id: Optional[str] = None
    employee_no: Optional[str] = None
    employee_cname: Optional[str] = None
    work_date: Optional[datetime] = None
    work_card_type: Optional[int] = None  # 0: clock-in, 1: clock-out
    work_card_date: Optional[datetime] = None
    card_data_date: Optional[datetime] = None
    card_data_code: Optional[str] = None

    @field_validator('employee_id', 'employee_no', mode='before')
    @classmethod
    def coerce_identifier(cls, v):
        if v is None:
            return None
        return str(v)

    @field_validator('card_data_code', mode='before')
    @classmethod
    def strip_code(cls, v):
        if v is None:
            return None
        return str(v).strip()

    @field_validator('work_date', 'work_card_date', 'card_data_date', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        """Fix datetime timezone format from the HR store (+08 -> +08:00)"""
        if v == '' or v is None:
            return None

        if isinstance(v, str):
            if re.search(r'([+-]\d{2})$', v):
                v = v + ':00'

        return v

    @property
    def punched(self) -> bool:
        return has_valid_punch(self.card_data_date)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CardDataMatch":
        """Build from a result row keyed by the view's upper-case column names"""
        return cls.model_validate({str(k).lower(): v for k, v in row.items()})


class AttendanceRecord(CamelModel):
    """
    One employee's clock-in/out outcome for one day

    Display time and status strings are derived from the punch timestamps
    and exception codes; the record itself is immutable.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    work_date: date = Field(exclude=True)
    clock_in_at: Optional[datetime] = Field(default=None, exclude=True)
    clock_in_code: Optional[str] = None
    clock_out_at: Optional[datetime] = Field(default=None, exclude=True)
    clock_out_code: Optional[str] = None

    @staticmethod
    def _display_time(at: Optional[datetime], code: Optional[str]) -> str:
        if requires_follow_up(code) or not has_valid_punch(at):
            return NOT_CLOCKED_LABEL
        return at.strftime(TIME_DISPLAY_FORMAT)

    @computed_field(alias="date")
    @property
    def display_date(self) -> str:
        return self.work_date.strftime(DATE_DISPLAY_FORMAT)

    @computed_field(alias="clockInTime")
    @property
    def clock_in_time(self) -> str:
        return self._display_time(self.clock_in_at, self.clock_in_code)

    @computed_field(alias="clockInStatus")
    @property
    def clock_in_status(self) -> str:
        return display_status(self.clock_in_code, has_valid_punch(self.clock_in_at))

    @computed_field(alias="clockOutTime")
    @property
    def clock_out_time(self) -> str:
        return self._display_time(self.clock_out_at, self.clock_out_code)

    @computed_field(alias="clockOutStatus")
    @property
    def clock_out_status(self) -> str:
        return display_status(self.clock_out_code, has_valid_punch(self.clock_out_at))


class AttendanceQueryRequest(CamelModel):
    """Query one employee's record for one day"""
    employee_no: str = Field(min_length=1)
    date: str

    @field_validator('employee_no')
    @classmethod
    def employee_no_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("員工編號不可為空")
        return v.strip()

    @field_validator('date')
    @classmethod
    def date_is_iso(cls, v: str) -> str:
        try:
            datetime.strptime(v, "%Y-%m-%d")
        except ValueError:
            raise ValueError("日期格式不正確，請使用 yyyy-MM-dd 格式（例如: 2025-10-28）")
        return v

    @property
    def query_date(self) -> date:
        return datetime.strptime(self.date, "%Y-%m-%d").date()
