"""
Employee Schemas for HR basic information
"""
from typing import Optional
from datetime import datetime

from pydantic import ConfigDict

from hrsystem.schemas.common import CamelModel


class EmployeeBasicInfo(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    employee_id: int
    employee_name: str = ""
    employee_no: str = ""
    company_name: Optional[str] = None
    department_name: Optional[str] = None
    job_title: Optional[str] = None
    join_date: Optional[datetime] = None
    email: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> "EmployeeBasicInfo":
        """Map a vwZZ_EMPLOYEE row (upper-case column names)"""
        return cls(
            employee_id=row["EMPLOYEE_ID"],
            employee_name=row.get("EMPLOYEE_CNAME") or "",
            employee_no=row.get("EMPLOYEE_NO") or "",
            company_name=row.get("COMPANY_CNAME"),
            department_name=row.get("DEPARTMENT_CNAME"),
            job_title=row.get("JOB_CNAME"),
            join_date=row.get("EMPLOYEE_ORG_START_DATE"),
            email=row.get("EMPLOYEE_EMAIL_1"),
        )
