from .attendance import CardDataMatch, AttendanceRecord, AttendanceQueryRequest
from .overtime import (
    OvertimeRecord,
    CreateOvertimeRequest,
    UpdateActualOvertimeRequest,
    OvertimeQueryRequest,
    OvertimeOperationResult,
    BpmOvertimeFormData
)
from .outing import (
    OutingFormRequest,
    PendingOutingFormQuery,
    ApproveOutingFormRequest,
    BatchApproveOutingFormRequest,
    OutingFormListItem,
    OutingFormDetail,
    ApprovalHistory,
    AttachmentInfo
)
from .auth import (
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    UserInfo,
    EmployeeStatusResponse,
    TokenValidationRequest,
    TokenResponse,
    TokenClaims
)
from .employee import EmployeeBasicInfo
from .common import CamelModel, FieldViolation, DataResponse, PaginationResponse

__all__ = [
    # Attendance schemas
    "CardDataMatch",
    "AttendanceRecord",
    "AttendanceQueryRequest",
    # Overtime schemas
    "OvertimeRecord",
    "CreateOvertimeRequest",
    "UpdateActualOvertimeRequest",
    "OvertimeQueryRequest",
    "OvertimeOperationResult",
    "BpmOvertimeFormData",
    # Outing schemas
    "OutingFormRequest",
    "PendingOutingFormQuery",
    "ApproveOutingFormRequest",
    "BatchApproveOutingFormRequest",
    "OutingFormListItem",
    "OutingFormDetail",
    "ApprovalHistory",
    "AttachmentInfo",
    # Auth schemas
    "LoginRequest",
    "LoginResponse",
    "RefreshTokenRequest",
    "UserInfo",
    "EmployeeStatusResponse",
    "TokenValidationRequest",
    "TokenResponse",
    "TokenClaims",
    # Employee schemas
    "EmployeeBasicInfo",
    # Common schemas
    "CamelModel",
    "FieldViolation",
    "DataResponse",
    "PaginationResponse"
]
