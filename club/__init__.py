"""
Club Records Module

Raw club records (members, events, attendance, contributions, fee payments)
and the record-store interface the analytics engine reads them through.
"""

from .models import (
    Position,
    MemberStatus,
    EventType,
    AttendanceStatus,
    ContributionType,
    MatchResult,
    Venue,
    Member,
    MatchDetails,
    Event,
    Attendance,
    Contribution,
    FeePayment,
    DEFENSIVE_ROLES,
    STAFF_ROLES,
    is_defensive_role,
    is_staff_role,
)
from .store import RecordStore, InMemoryRecordStore, JsonRecordStore

__all__ = [
    "Position",
    "MemberStatus",
    "EventType",
    "AttendanceStatus",
    "ContributionType",
    "MatchResult",
    "Venue",
    "Member",
    "MatchDetails",
    "Event",
    "Attendance",
    "Contribution",
    "FeePayment",
    "DEFENSIVE_ROLES",
    "STAFF_ROLES",
    "is_defensive_role",
    "is_staff_role",
    "RecordStore",
    "InMemoryRecordStore",
    "JsonRecordStore",
]
