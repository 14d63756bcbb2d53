"""
Identity Service - HR account status and login token ids
"""
import random
from datetime import datetime
from typing import Optional

from hrsystem.schemas.auth import (
    EmployeeStatusResponse,
    LoginResponse,
    STATUS_ACTIVE,
    STATUS_BANNED,
    STATUS_SUSPENDED,
    TokenResponse,
    UserInfo,
)
from hrsystem.schemas.employee import EmployeeBasicInfo
from atams.logging import get_logger

logger = get_logger(__name__)

NOT_FOUND_STATUS = "NOT_FOUND"
NOT_FOUND_NAME = "查無此員工"

_STATUS_NAMES = {
    STATUS_ACTIVE: "使用",
    STATUS_SUSPENDED: "停用",
    STATUS_BANNED: "永久停權",
}


def status_name(status: Optional[str]) -> str:
    return _STATUS_NAMES.get(status or "", "未知狀態")


def employee_status(uid: str, raw_status: Optional[str]) -> EmployeeStatusResponse:
    """Status for a uid; an empty status means no such employee"""
    if not raw_status or not raw_status.strip():
        return EmployeeStatusResponse(uid=uid, status=NOT_FOUND_STATUS, status_name=NOT_FOUND_NAME)
    status = raw_status.strip()
    return EmployeeStatusResponse(uid=uid, status=status, status_name=status_name(status))


def generate_token_id(now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> str:
    """nn + HHmmss + nn, each nn drawn from 10..98"""
    now = now or datetime.now()
    rng = rng or random.Random()
    return f"{rng.randint(10, 98)}{now.strftime('%H%M%S')}{rng.randint(10, 98)}"


def build_user_info(employee: EmployeeBasicInfo, status: str) -> UserInfo:
    return UserInfo(
        uid=employee.employee_no,
        employee_no=employee.employee_no,
        employee_name=employee.employee_name,
        email=employee.email or "",
        company_name=employee.company_name,
        department_name=employee.department_name,
        job_title=employee.job_title,
        status=status,
    )


def build_login_response(
    tokens: TokenResponse,
    employee: EmployeeBasicInfo,
    status: str,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> LoginResponse:
    response = LoginResponse(
        token_id=generate_token_id(now, rng),
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token or "",
        expires_in=tokens.expires_in or 0,
        uid=employee.employee_no,
        employee_no=employee.employee_no,
        employee_name=employee.employee_name,
        email=employee.email or "",
        status=status,
    )
    logger.info(
        f"Login response built for {employee.employee_no}",
        extra={'extra_data': {'token_id': response.token_id, 'is_active': response.is_active}}
    )
    return response
