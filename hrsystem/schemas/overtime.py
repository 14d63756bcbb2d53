"""
Overtime Schemas for BPM overtime forms
"""
from decimal import Decimal
from typing import List, Optional
from datetime import date, time

from pydantic import EmailStr, Field

from hrsystem.schemas.common import CamelModel, DEFAULT_WINDOW_MONTHS, months_before

COMPENSATION_TYPES = ("補休", "加班費")


class OvertimeRecord(CamelModel):
    """Overtime form as returned by BPM; approval fields are opaque strings"""
    form_id: str
    employee_no: str
    employee_name: str
    overtime_date: str  # yyyy/MM/dd
    planned_start_time: str  # yyyy/MM/dd HH:mm
    planned_end_time: str
    actual_start_time: Optional[str] = None
    actual_end_time: Optional[str] = None
    reason: str
    compensation_type: str
    apply_date_time: str
    approval_status: str
    approver_name: Optional[str] = None
    approval_date_time: Optional[str] = None
    remark: Optional[str] = None
    overtime_hours: Decimal = Decimal("0")
    agree_to_rest_day_swap: bool = False
    is_sunday_overtime: bool = False
    attachments: Optional[List[str]] = None


class CreateOvertimeRequest(CamelModel):
    """Apply for overtime; attachments are paths already stored on FTP"""
    employee_no: str = Field(min_length=1)
    employee_email: EmailStr
    overtime_date: date
    start_time: time
    end_time: time
    reason: str = Field(min_length=1, max_length=500)
    compensation_type: str = Field(min_length=1)
    agree_to_rest_day_swap: Optional[bool] = None
    remark: Optional[str] = Field(default=None, max_length=500)
    attachments: Optional[List[str]] = None


class UpdateActualOvertimeRequest(CamelModel):
    actual_start_time: time
    actual_end_time: time


class OvertimeQueryRequest(CamelModel):
    employee_no: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    approval_status: Optional[str] = None

    def with_default_window(self, today: date) -> "OvertimeQueryRequest":
        """Fill in the last two months when neither bound is given"""
        if self.start_date is not None or self.end_date is not None:
            return self
        return self.model_copy(update={
            "start_date": months_before(today, DEFAULT_WINDOW_MONTHS),
            "end_date": today,
        })


class OvertimeOperationResult(CamelModel):
    success: bool
    message: str
    form_id: Optional[str] = None
    attachment_paths: Optional[List[str]] = None


class BpmOvertimeFormData(CamelModel):
    """Overtime form payload submitted to BPM"""
    user_id: str
    employee_no: str
    employee_name: str
    overtime_date: str
    planned_start_time: str
    planned_end_time: str
    reason: str
    compensation_type: str
    overtime_hours: Decimal
    agree_to_rest_day_swap: bool = False
    remark: Optional[str] = None
    attachments: Optional[List[str]] = None
