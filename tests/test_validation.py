from hrsystem.schemas.attendance import AttendanceQueryRequest
from hrsystem.schemas.auth import LoginRequest
from hrsystem.services.validation_service import require_text, validate_payload


def test_validate_payload_success():
    request, violations = validate_payload(LoginRequest, {"email": "amy@example.com", "password": "x"})
    assert violations == []
    assert request.email == "amy@example.com"


def test_validate_payload_reports_fields():
    request, violations = validate_payload(LoginRequest, {"email": "nope", "password": ""})
    assert request is None
    assert sorted(v.field for v in violations) == ["email", "password"]


def test_validate_payload_keeps_custom_message():
    _, violations = validate_payload(AttendanceQueryRequest, {"employeeNo": "E1", "date": "28/10/2025"})
    assert violations[0].field == "date"
    assert "yyyy-MM-dd" in violations[0].message


def test_require_text():
    violations = []
    require_text(violations, "reason", "  ", "事由為必填欄位")
    require_text(violations, "location", "台北", "地點為必填欄位")
    assert [(v.field, v.type) for v in violations] == [("reason", "missing")]
