"""
Outing Service - Outing form rules, BPM payload shaping and pagination
"""
import math
from typing import Any, Dict, List, Optional, Sequence

from hrsystem.schemas.common import FieldViolation, PaginationResponse
from hrsystem.schemas.outing import (
    APPROVE_ACTIONS,
    BATCH_APPROVE_ACTIONS,
    ApproveOutingFormRequest,
    BatchApproveOutingFormRequest,
    OutingFormRequest,
)
from hrsystem.services.validation_service import require_text, violation
from atams.exceptions import BadRequestException
from atams.logging import get_logger

logger = get_logger(__name__)

BPM_DATE_FORMAT = "%Y-%m-%d"
BPM_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def paginate(items: Sequence[Any], total: int, page: int, size: int, message: str = "查詢成功") -> PaginationResponse:
    """Wrap one page of results; pages is ceil(total / size)"""
    if page < 1 or size < 1:
        raise BadRequestException(
            "頁碼與每頁筆數必須大於 0",
            details={"page": page, "size": size}
        )
    return PaginationResponse(
        success=True,
        message=message,
        data=list(items),
        total=total,
        page=page,
        size=size,
        pages=math.ceil(total / size) if total else 0,
    )


class OutingService:
    def validate_request(self, request: OutingFormRequest) -> List[FieldViolation]:
        violations: List[FieldViolation] = []
        require_text(violations, "email", request.email, "Email 為必填欄位")
        require_text(violations, "type", request.type, "類別為必填欄位（外出/外訓）")
        require_text(violations, "location", request.location, "地點為必填欄位")
        require_text(violations, "reason", request.reason, "事由為必填欄位")

        # Cross-day outings are filed as two forms
        if request.start_time.date() != request.end_time.date():
            violations.append(violation("endTime", "外出時間不可跨天，跨天請分別申請兩張外出單"))
        elif request.end_time <= request.start_time:
            violations.append(violation("endTime", "截止時間必須大於起始時間"))
        return violations

    def validate_approve(self, request: ApproveOutingFormRequest) -> List[FieldViolation]:
        violations: List[FieldViolation] = []
        require_text(violations, "formId", request.form_id, "表單ID為必填欄位")
        require_text(violations, "approverEmail", request.approver_email, "簽核人Email為必填欄位")
        if not request.action.strip():
            violations.append(violation("action", "動作為必填欄位（approve/reject/return）", "missing"))
        elif self.normalize_action(request.action) not in APPROVE_ACTIONS:
            violations.append(violation("action", "無效的動作，僅接受 approve/reject/return"))
        return violations

    def validate_batch_approve(self, request: BatchApproveOutingFormRequest) -> List[FieldViolation]:
        violations: List[FieldViolation] = []
        if not request.form_ids:
            violations.append(violation("formIds", "表單ID列表不可為空", "missing"))
        require_text(violations, "approverEmail", request.approver_email, "簽核人Email為必填欄位")
        if not request.action.strip():
            violations.append(violation("action", "動作為必填欄位（approve/reject）", "missing"))
        elif self.normalize_action(request.action) not in BATCH_APPROVE_ACTIONS:
            violations.append(violation("action", "批次簽核僅接受 approve/reject"))
        return violations

    def build_bpm_payload(
        self,
        request: OutingFormRequest,
        user_id: str,
        attachment_paths: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """
        Shape an outing application into the BPM form payload

        Args:
            request: Outing application
            user_id: BPM user id resolved from request.email
            attachment_paths: Stored attachment paths (defaults to request.attachments)

        Raises:
            BadRequestException: If the request breaks a business rule
        """
        violations = self.validate_request(request)
        if violations:
            raise BadRequestException(
                violations[0].message,
                details={"errors": [v.model_dump() for v in violations]}
            )

        paths = attachment_paths if attachment_paths is not None else (request.attachments or [])
        payload = {
            "user_id": user_id,
            "type": request.type,
            "date": request.date.strftime(BPM_DATE_FORMAT),
            "start_time": request.start_time.strftime(BPM_DATETIME_FORMAT),
            "end_time": request.end_time.strftime(BPM_DATETIME_FORMAT),
            "location": request.location,
            "reason": request.reason,
            "return_to_office": request.return_to_office,
            "file_paths": list(paths),
        }
        logger.info(
            f"Outing form shaped for {request.email}",
            extra={'extra_data': {'user_id': user_id, 'attachments': len(paths)}}
        )
        return payload

    def normalize_action(self, action: str) -> str:
        return action.strip().lower()
