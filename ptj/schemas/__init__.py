from ptj.schemas.admin import AdminUserOut, DashboardStats, JobStats, UserStats
from ptj.schemas.application import (
    ApplicationCreate,
    ApplicationHistoryOut,
    ApplicationOut,
    ApplicationStatsOut,
    ApplicationStatusOut,
    ApplicationStatusUpdate,
)
from ptj.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest
from ptj.schemas.common import Envelope, ErrorEnvelope, Page
from ptj.schemas.company import (
    ApproveCompanyRequest,
    CompanyAttributes,
    CompanyOut,
    CompanyRequestOut,
    RejectCompanyRequest,
)
from ptj.schemas.job_post import (
    JobPostCreate,
    JobPostOut,
    JobPostStatusUpdate,
    JobPostUpdate,
    JobSearchParams,
    JobShiftIn,
    JobShiftOut,
)
from ptj.schemas.profile import ProfileOut, ProfileUpsert

__all__ = [
    "AdminUserOut",
    "DashboardStats",
    "JobStats",
    "UserStats",
    "ApplicationCreate",
    "ApplicationHistoryOut",
    "ApplicationOut",
    "ApplicationStatsOut",
    "ApplicationStatusOut",
    "ApplicationStatusUpdate",
    "AuthResponse",
    "LoginRequest",
    "MeResponse",
    "RegisterRequest",
    "Envelope",
    "ErrorEnvelope",
    "Page",
    "ApproveCompanyRequest",
    "CompanyAttributes",
    "CompanyOut",
    "CompanyRequestOut",
    "RejectCompanyRequest",
    "JobPostCreate",
    "JobPostOut",
    "JobPostStatusUpdate",
    "JobPostUpdate",
    "JobSearchParams",
    "JobShiftIn",
    "JobShiftOut",
    "ProfileOut",
    "ProfileUpsert",
]
