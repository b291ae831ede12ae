"""
Snapshot integrity

Builds the immutable record snapshot the scorers work on and drops records
that point at members (or events) the snapshot does not contain. One bad
record never fails the whole computation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Optional, Sequence, Tuple

from pydantic import BaseModel, Field
from loguru import logger

from club.models import Member, Event, Attendance, Contribution, FeePayment
from club.store import RecordStore


class IssueSeverity(str, Enum):
    """Integrity issue severity"""
    HIGH = "high"       # record excluded
    LOW = "low"         # record kept, logged only


class IntegrityIssue(BaseModel):
    """One record excluded (or flagged) while building a snapshot"""
    issue_type: str = Field(..., description="Issue type")
    severity: IssueSeverity = Field(default=IssueSeverity.HIGH)
    record_type: str = Field(..., description="Collection of the record")
    record_id: Optional[str] = Field(None, description="Record ID, when it has one")
    field: Optional[str] = Field(None, description="Offending field")
    value: Optional[Any] = Field(None, description="Offending value")
    message: str = ""


class IntegrityReport(BaseModel):
    """Outcome of the integrity pass"""
    issues: List[IntegrityIssue] = Field(default_factory=list)
    excluded: Dict[str, int] = Field(default_factory=dict)

    @property
    def is_clean(self) -> bool:
        return not self.issues

    @property
    def excluded_total(self) -> int:
        return sum(self.excluded.values())

    def add(self, issue: IntegrityIssue):
        self.issues.append(issue)
        if issue.severity == IssueSeverity.HIGH:
            self.excluded[issue.record_type] = self.excluded.get(issue.record_type, 0) + 1


@dataclass(frozen=True)
class ClubSnapshot:
    """Immutable set of records for one computation"""
    members: Tuple[Member, ...] = ()
    events: Tuple[Event, ...] = ()
    attendance: Tuple[Attendance, ...] = ()
    contributions: Tuple[Contribution, ...] = ()
    fee_payments: Tuple[FeePayment, ...] = ()
    report: IntegrityReport = field(default_factory=IntegrityReport, compare=False)

    @property
    def member_ids(self) -> frozenset:
        return frozenset(m.id for m in self.members)

    @property
    def completed_matches(self) -> Tuple[Event, ...]:
        return tuple(e for e in self.events if e.is_completed_match)


def _orphan_issue(record_type: str, record, field_name: str, value: str, target: str) -> IntegrityIssue:
    return IntegrityIssue(
        issue_type="ORPHANED_RECORD",
        record_type=record_type,
        record_id=getattr(record, "id", None),
        field=field_name,
        value=value,
        message=f"{record_type} record points at unknown {target} {value}",
    )


def build_snapshot(
    members: Sequence[Member] = (),
    events: Sequence[Event] = (),
    attendance: Sequence[Attendance] = (),
    contributions: Sequence[Contribution] = (),
    fee_payments: Sequence[FeePayment] = (),
) -> ClubSnapshot:
    """Snapshot the given collections, excluding orphaned records.

    - duplicate member (or event) IDs keep the first record
    - attendance/contribution/fee records for unknown members are excluded
    - attendance marks for unknown events are excluded
    """
    report = IntegrityReport()

    unique_members: Dict[str, Member] = {}
    for m in members:
        if m.id in unique_members:
            report.add(IntegrityIssue(
                issue_type="DUPLICATE_ID",
                record_type="members",
                record_id=m.id,
                field="id",
                value=m.id,
                message=f"Duplicate member ID {m.id}, keeping the first record",
            ))
            continue
        unique_members[m.id] = m

    unique_events: Dict[str, Event] = {}
    for e in events:
        if e.id in unique_events:
            report.add(IntegrityIssue(
                issue_type="DUPLICATE_ID",
                record_type="events",
                record_id=e.id,
                field="id",
                value=e.id,
                message=f"Duplicate event ID {e.id}, keeping the first record",
            ))
            continue
        unique_events[e.id] = e

    kept_attendance = []
    for a in attendance:
        if a.member_id not in unique_members:
            report.add(_orphan_issue("attendance", a, "member_id", a.member_id, "member"))
        elif a.event_id not in unique_events:
            report.add(_orphan_issue("attendance", a, "event_id", a.event_id, "event"))
        else:
            kept_attendance.append(a)

    kept_contributions = []
    for c in contributions:
        if c.member_id not in unique_members:
            report.add(_orphan_issue("contributions", c, "member_id", c.member_id, "member"))
        else:
            kept_contributions.append(c)

    kept_payments = []
    for p in fee_payments:
        if p.member_id not in unique_members:
            report.add(_orphan_issue("fee_payments", p, "member_id", p.member_id, "member"))
        else:
            kept_payments.append(p)

    # Match sheets naming unknown members only lose those entries' effect; flag them
    for e in unique_events.values():
        if not e.is_completed_match:
            continue
        d = e.match_details
        named = set(d.goal_scorers) | set(d.assists) | set(d.yellow_cards) | set(d.red_cards)
        if d.man_of_the_match:
            named.add(d.man_of_the_match)
        for member_id in sorted(named - unique_members.keys()):
            report.add(IntegrityIssue(
                issue_type="UNKNOWN_MATCH_PARTICIPANT",
                severity=IssueSeverity.LOW,
                record_type="events",
                record_id=e.id,
                field="match_details",
                value=member_id,
                message=f"Match {e.id} names unknown member {member_id}",
            ))

    if report.excluded_total:
        logger.warning(f"Snapshot: excluded {report.excluded_total} record(s) {report.excluded}")

    snapshot = ClubSnapshot(
        members=tuple(unique_members.values()),
        events=tuple(unique_events.values()),
        attendance=tuple(kept_attendance),
        contributions=tuple(kept_contributions),
        fee_payments=tuple(kept_payments),
        report=report,
    )
    logger.debug(
        f"Snapshot built: {len(snapshot.members)} members, {len(snapshot.events)} events, "
        f"{len(snapshot.attendance)} attendance, {len(snapshot.contributions)} contributions, "
        f"{len(snapshot.fee_payments)} fee payments"
    )
    return snapshot


def load_snapshot(store: RecordStore) -> ClubSnapshot:
    """Read every collection from a record store and snapshot it"""
    return build_snapshot(
        members=store.get_members(),
        events=store.get_events(),
        attendance=store.get_attendance(),
        contributions=store.get_contributions(),
        fee_payments=store.get_fee_payments(),
    )
