"""
Overtime Service - Overtime form rules and BPM form shaping
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional
from datetime import date, datetime, time

from hrsystem.schemas.common import FieldViolation
from hrsystem.schemas.overtime import (
    BpmOvertimeFormData,
    COMPENSATION_TYPES,
    CreateOvertimeRequest,
    OvertimeRecord,
    UpdateActualOvertimeRequest,
)
from hrsystem.services.validation_service import violation
from atams.exceptions import BadRequestException
from atams.logging import get_logger

logger = get_logger(__name__)

DATE_DISPLAY_FORMAT = "%Y/%m/%d"
DATETIME_DISPLAY_FORMAT = "%Y/%m/%d %H:%M"
PENDING_STATUS = "待審核"
SUNDAY = 6
RECENT_MONTHS_MIN = 1
RECENT_MONTHS_MAX = 12


def is_sunday(day: date) -> bool:
    return day.weekday() == SUNDAY


def overtime_hours(start: time, end: time) -> Decimal:
    """Hours between two same-day times, rounded to 0.01"""
    minutes = (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)
    if minutes <= 0:
        raise BadRequestException(
            "結束時間必須大於開始時間",
            details={"startTime": start.isoformat(), "endTime": end.isoformat()}
        )
    return (Decimal(minutes) / Decimal(60)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class OvertimeService:
    def validate_create(self, request: CreateOvertimeRequest) -> List[FieldViolation]:
        """Business rules beyond the declarative field constraints"""
        violations = []
        if request.end_time <= request.start_time:
            violations.append(violation("endTime", "結束時間必須大於開始時間"))
        if request.compensation_type not in COMPENSATION_TYPES:
            violations.append(violation(
                "compensationType",
                f"處理方式僅接受: {'/'.join(COMPENSATION_TYPES)}"
            ))
        if is_sunday(request.overtime_date) and not request.agree_to_rest_day_swap:
            violations.append(violation("agreeToRestDaySwap", "週日加班必須同意例休對調"))
        return violations

    def validate_actual(self, request: UpdateActualOvertimeRequest) -> List[FieldViolation]:
        if request.actual_end_time <= request.actual_start_time:
            return [violation("actualEndTime", "實際結束時間必須大於實際開始時間")]
        return []

    def validate_recent_months(self, employee_no: Optional[str], months: int) -> List[FieldViolation]:
        violations = []
        if employee_no is None or not employee_no.strip():
            violations.append(violation("employeeNo", "員工編號為必填", "missing"))
        if not RECENT_MONTHS_MIN <= months <= RECENT_MONTHS_MAX:
            violations.append(violation(
                "months",
                f"月份數必須在 {RECENT_MONTHS_MIN}-{RECENT_MONTHS_MAX} 之間"
            ))
        return violations

    def build_bpm_form(
        self,
        request: CreateOvertimeRequest,
        user_id: str,
        employee_name: str,
        attachments: Optional[List[str]] = None
    ) -> BpmOvertimeFormData:
        """
        Shape a validated request into the BPM overtime payload

        Args:
            request: Overtime application
            user_id: BPM user id resolved from the employee email
            employee_name: Display name from the HR store
            attachments: Stored attachment paths (defaults to request.attachments)

        Raises:
            BadRequestException: If the request breaks a business rule
        """
        violations = self.validate_create(request)
        if violations:
            raise BadRequestException(
                "加班單資料不正確",
                details={"errors": [v.model_dump() for v in violations]}
            )

        start = datetime.combine(request.overtime_date, request.start_time)
        end = datetime.combine(request.overtime_date, request.end_time)
        form = BpmOvertimeFormData(
            user_id=user_id,
            employee_no=request.employee_no,
            employee_name=employee_name,
            overtime_date=request.overtime_date.strftime(DATE_DISPLAY_FORMAT),
            planned_start_time=start.strftime(DATETIME_DISPLAY_FORMAT),
            planned_end_time=end.strftime(DATETIME_DISPLAY_FORMAT),
            reason=request.reason,
            compensation_type=request.compensation_type,
            overtime_hours=overtime_hours(request.start_time, request.end_time),
            agree_to_rest_day_swap=bool(request.agree_to_rest_day_swap),
            remark=request.remark,
            attachments=attachments if attachments is not None else request.attachments,
        )
        logger.info(
            f"Overtime form shaped for {request.employee_no}",
            extra={'extra_data': {'user_id': user_id, 'hours': str(form.overtime_hours)}}
        )
        return form

    def to_record(
        self,
        form_id: str,
        form: BpmOvertimeFormData,
        applied_at: datetime,
        approval_status: str = PENDING_STATUS
    ) -> OvertimeRecord:
        """Record view of a submitted form; approval_status is whatever BPM reports"""
        overtime_date = datetime.strptime(form.overtime_date, DATE_DISPLAY_FORMAT).date()
        return OvertimeRecord(
            form_id=form_id,
            employee_no=form.employee_no,
            employee_name=form.employee_name,
            overtime_date=form.overtime_date,
            planned_start_time=form.planned_start_time,
            planned_end_time=form.planned_end_time,
            reason=form.reason,
            compensation_type=form.compensation_type,
            apply_date_time=applied_at.strftime(DATETIME_DISPLAY_FORMAT),
            approval_status=approval_status,
            remark=form.remark,
            overtime_hours=form.overtime_hours,
            agree_to_rest_day_swap=form.agree_to_rest_day_swap,
            is_sunday_overtime=is_sunday(overtime_date),
            attachments=form.attachments,
        )
