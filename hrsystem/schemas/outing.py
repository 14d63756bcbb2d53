"""
Outing Form Schemas for business-outing applications and their approval trail
"""
import os
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime

from pydantic import ConfigDict, Field, computed_field, field_validator

from hrsystem.schemas.common import CamelModel, DEFAULT_WINDOW_MONTHS, months_before, wall_clock
from atams.exceptions import ConflictException

OUTING_TYPES = ("外出", "外訓")
APPROVE_ACTIONS = ("approve", "reject", "return")
BATCH_APPROVE_ACTIONS = ("approve", "reject")

_CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".txt": "text/plain",
}


def content_type_for(file_name: str) -> str:
    """MIME type for an attachment download, by extension"""
    extension = os.path.splitext(file_name)[1].lower()
    return _CONTENT_TYPES.get(extension, "application/octet-stream")


class OutingFormRequest(CamelModel):
    """Apply for an outing; attachments are paths already stored on FTP"""
    email: str = ""
    type: str = ""  # 外出/外訓
    date: datetime
    start_time: datetime
    end_time: datetime
    location: str = ""
    reason: str = ""
    return_to_office: bool = False
    attachments: Optional[List[str]] = None

    @field_validator('date', 'start_time', 'end_time')
    @classmethod
    def local_time(cls, v: datetime) -> datetime:
        return wall_clock(v)


class PendingOutingFormQuery(CamelModel):
    approver_email: Optional[str] = None
    year: Optional[int] = None
    month: Optional[int] = Field(default=None, ge=1, le=12)
    day: Optional[int] = Field(default=None, ge=1, le=31)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    employee_name: Optional[str] = None
    page_number: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1)

    def to_query_params(self, approver_id: str, now: datetime) -> Dict[str, Any]:
        """
        BPM pending-form filter for an approver

        Without a year or explicit range the last two months are used.
        """
        start_date, end_date = self.start_date, self.end_date
        if self.year is None and start_date is None and end_date is None:
            start_date = datetime.combine(months_before(now.date(), DEFAULT_WINDOW_MONTHS), datetime.min.time())
            end_date = now
        params: Dict[str, Any] = {
            "approver_id": approver_id,
            "page_number": self.page_number,
            "page_size": self.page_size,
        }
        for key, value in (("year", self.year), ("month", self.month), ("day", self.day)):
            if value is not None:
                params[key] = value
        if start_date is not None:
            params["start_date"] = start_date.strftime("%Y-%m-%d")
        if end_date is not None:
            params["end_date"] = end_date.strftime("%Y-%m-%d")
        if self.employee_name:
            params["employee_name"] = self.employee_name
        return params


class ApproveOutingFormRequest(CamelModel):
    form_id: str = ""
    approver_email: str = ""
    action: str = ""  # approve/reject/return
    comment: Optional[str] = None


class BatchApproveOutingFormRequest(CamelModel):
    form_ids: List[str] = Field(default_factory=list)
    approver_email: str = ""
    action: str = ""  # approve/reject
    comment: Optional[str] = None


class OutingFormListItem(CamelModel):
    form_id: str
    employee_name: str
    employee_id: str
    type: str
    date: datetime
    start_time: datetime
    end_time: datetime
    location: str
    status: str
    created_at: datetime


class ApprovalHistory(CamelModel):
    model_config = ConfigDict(frozen=True)

    approver_name: str
    action: str
    comment: Optional[str] = None
    approved_at: datetime

    @field_validator('approved_at')
    @classmethod
    def local_time(cls, v: datetime) -> datetime:
        return wall_clock(v)


class AttachmentInfo(CamelModel):
    file_name: str
    file_type: str  # Word/Excel/PDF/Image
    file_path: str
    file_size: int = 0
    uploaded_at: datetime

    @computed_field(alias="contentType")
    @property
    def content_type(self) -> str:
        return content_type_for(self.file_name)


class OutingFormDetail(CamelModel):
    """Full outing form with its append-only approval trail"""
    model_config = ConfigDict(frozen=True)

    form_id: str
    employee_name: str
    employee_id: str
    department: str = ""
    type: str
    date: datetime
    start_time: datetime
    end_time: datetime
    location: str
    reason: str
    return_to_office: bool = False
    status: str
    created_at: datetime
    approval_history: Tuple[ApprovalHistory, ...] = ()
    attachments: List[AttachmentInfo] = Field(default_factory=list)
    note: Optional[str] = None

    @field_validator('approval_history')
    @classmethod
    def order_by_approval_time(cls, v: Tuple[ApprovalHistory, ...]) -> Tuple[ApprovalHistory, ...]:
        return tuple(sorted(v, key=lambda entry: entry.approved_at))

    @field_validator('date', 'start_time', 'end_time', 'created_at')
    @classmethod
    def local_time(cls, v: datetime) -> datetime:
        return wall_clock(v)

    def add_approval(self, entry: ApprovalHistory) -> "OutingFormDetail":
        """
        New detail with entry appended to the trail

        Raises:
            ConflictException: If entry predates the latest approval
        """
        if self.approval_history and entry.approved_at < self.approval_history[-1].approved_at:
            raise ConflictException(
                "Approval entry predates the latest approval",
                details={
                    "formId": self.form_id,
                    "approvedAt": entry.approved_at.isoformat(),
                    "latest": self.approval_history[-1].approved_at.isoformat(),
                }
            )
        return self.model_copy(update={"approval_history": (*self.approval_history, entry)})
