from sqlmodel import SQLModel

from leavedesk.models.audit import AuditLog
from leavedesk.models.balance import LeaveBalance
from leavedesk.models.base import IntIdBase, TimestampMixin, UpdatedAtMixin
from leavedesk.models.employee import Employee, EmployeeManager
from leavedesk.models.enums import (
    ApplicationStatus,
    AuditAction,
    AuditEntityType,
    JobStatus,
    LeaveAction,
    LeaveDuration,
    LeaveKind,
    LeaveStatus,
    LeaveType,
    UserType,
)
from leavedesk.models.job import JobApplication, JobPosting
from leavedesk.models.leave import LeaveRequest
from leavedesk.models.user import User

__all__ = [
    "ApplicationStatus",
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "Employee",
    "EmployeeManager",
    "IntIdBase",
    "JobApplication",
    "JobPosting",
    "JobStatus",
    "LeaveAction",
    "LeaveBalance",
    "LeaveDuration",
    "LeaveKind",
    "LeaveRequest",
    "LeaveStatus",
    "LeaveType",
    "SQLModel",
    "TimestampMixin",
    "UpdatedAtMixin",
    "User",
    "UserType",
]
