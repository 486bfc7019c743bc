from ptj.models.application import Application, ApplicationHistory, ApplicationStatus, ApplicationStatusLookup
from ptj.models.company import Company, CompanyRegistrationRequest, CompanyRequestStatus
from ptj.models.job_post import JobPost, JobPostSkill, JobPostStatus, JobShift
from ptj.models.profile import Profile, ProfileCertificate, ProfileEducation, ProfileExperience, ProfileSkill
from ptj.models.user import Role, RoleName, User, UserRole

__all__ = [
    "Application",
    "ApplicationHistory",
    "ApplicationStatus",
    "ApplicationStatusLookup",
    "Company",
    "CompanyRegistrationRequest",
    "CompanyRequestStatus",
    "JobPost",
    "JobPostSkill",
    "JobPostStatus",
    "JobShift",
    "Profile",
    "ProfileCertificate",
    "ProfileEducation",
    "ProfileExperience",
    "ProfileSkill",
    "Role",
    "RoleName",
    "User",
    "UserRole",
]
