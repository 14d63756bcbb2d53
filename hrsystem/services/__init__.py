from .attendance_service import AttendanceService
from .overtime_service import OvertimeService
from .outing_service import OutingService, paginate
from .jwt_service import OidcTokenService
from .keycloak_client import KeycloakClient
from .identity_service import employee_status, generate_token_id, status_name

__all__ = [
    "AttendanceService",
    "OvertimeService",
    "OutingService",
    "paginate",
    "OidcTokenService",
    "KeycloakClient",
    "employee_status",
    "generate_token_id",
    "status_name"
]
