from __future__ import annotations

import enum


class LeaveKind(enum.StrEnum):
    """Whether a request is time off or work from home."""

    LEAVE = "Leave"
    WFH = "WFH"


class LeaveType(enum.StrEnum):
    """Balance bucket a leave request is charged against."""

    SICK = "Sick Leave"
    CASUAL = "Casual Leave"
    EARNED = "Earned Leave"


class LeaveDuration(enum.StrEnum):
    """Length of each leave day."""

    FULL_DAY = "Full Day"
    HALF_DAY = "Half Day"


class LeaveStatus(enum.StrEnum):
    """Lifecycle of a leave request. Accepted and Rejected are terminal."""

    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class LeaveAction(enum.StrEnum):
    """Decision a manager can take on a pending request."""

    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class UserType(enum.StrEnum):
    """Account role."""

    ADMIN = "Admin"
    MANAGER = "Manager"
    EMPLOYEE = "Employee"


class JobStatus(enum.StrEnum):
    """Whether a job posting is open for applications."""

    ACTIVE = "Active"
    CLOSED = "Closed"


class ApplicationStatus(enum.StrEnum):
    """Recruitment pipeline stage of a job application."""

    APPLIED = "Applied"
    SHORTLISTED = "Shortlisted"
    INTERVIEWING = "Interviewing"
    OFFERED = "Offered"
    HIRED = "Hired"
    REJECTED = "Rejected"


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    LEAVE_REQUEST = "LEAVE_REQUEST"
    LEAVE_BALANCE = "LEAVE_BALANCE"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    SUBMIT = "SUBMIT"
    ACCEPT = "ACCEPT"
    REJECT = "REJECT"
