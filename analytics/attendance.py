"""
Attendance normalizer

Players join at different times, so raw attendance rates are not comparable.
Non-staff members are instead rated against the cohort baseline: the most
sessions attended by any active player.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Iterable, Sequence

from loguru import logger

from club.models import Member, Event, Attendance, AttendanceStatus, is_staff_role
from .config import ScoringConfig, scoring_config
from .utils import clamp, safe_rate, iso


@dataclass
class AttendanceSummary:
    """Attendance figures for one member"""
    total_sessions: int = 0
    attended: int = 0
    missed: int = 0
    late: int = 0
    excused: int = 0
    raw_rate: float = 0.0
    normalized_rate: float = 0.0
    cohort_baseline: int = 0
    recent_attendance: list = field(default_factory=list)

    def to_dict(self):
        return asdict(self)


def _events_with_status(records: Iterable[Attendance], status: AttendanceStatus) -> set:
    return {a.event_id for a in records if a.status == status}


def attended_event_count(member_id: str, attendance: Iterable[Attendance]) -> int:
    """Distinct events the member was marked present at"""
    return len({a.event_id for a in attendance
                if a.member_id == member_id and a.status == AttendanceStatus.present})


def compute_cohort_baseline(members: Sequence[Member], attendance: Iterable[Attendance]) -> int:
    """Most distinct attended events achieved by any active, non-staff member"""
    present: Dict[str, set] = {}
    for a in attendance:
        if a.status == AttendanceStatus.present:
            present.setdefault(a.member_id, set()).add(a.event_id)

    baseline = 0
    for m in members:
        if m.is_active and not is_staff_role(m.position):
            baseline = max(baseline, len(present.get(m.id, ())))
    return baseline


def summarize_attendance(
    member: Member,
    attendance: Iterable[Attendance],
    members: Sequence[Member] = (),
    events: Optional[Dict[str, Event]] = None,
    baseline: Optional[int] = None,
    config: Optional[ScoringConfig] = None,
) -> AttendanceSummary:
    """Attendance summary for one member.

    Args:
        member: member being rated
        attendance: attendance marks (any member; filtered here)
        members: full member list, used for the cohort baseline
        events: event lookup by ID, used for the recent-attendance slice
        baseline: precomputed cohort baseline (computed from ``members`` if None)
        config: scoring settings
    """
    config = config or scoring_config
    attendance = list(attendance)
    records = [a for a in attendance if a.member_id == member.id]

    summary = AttendanceSummary()
    summary.total_sessions = len({a.event_id for a in records})
    summary.attended = len(_events_with_status(records, AttendanceStatus.present))
    summary.missed = len(_events_with_status(records, AttendanceStatus.absent))
    summary.late = len(_events_with_status(records, AttendanceStatus.late))
    summary.excused = len(_events_with_status(records, AttendanceStatus.excused))
    summary.raw_rate = clamp(safe_rate(summary.attended, summary.total_sessions))

    if is_staff_role(member.position):
        # staff are never compared against the playing cohort
        summary.normalized_rate = summary.raw_rate
    else:
        if baseline is None:
            baseline = compute_cohort_baseline(members, attendance)
        summary.cohort_baseline = baseline
        summary.normalized_rate = clamp(summary.attended / max(baseline, 1) * 100)

    if events:
        summary.recent_attendance = _recent_attendance(records, events, config.recent_attendance_limit)

    return summary


def _recent_attendance(records: List[Attendance], events: Dict[str, Event], limit: int) -> List[dict]:
    """Latest attendance marks, event date descending"""
    dated = [(events[a.event_id], a) for a in records if a.event_id in events]
    dated.sort(key=lambda pair: (pair[0].date, pair[0].id), reverse=True)

    if len(dated) < len(records):
        logger.debug(f"{len(records) - len(dated)} attendance mark(s) without a known event")

    return [
        {
            "event_id": event.id,
            "date": iso(event.date),
            "type": event.type.value,
            "status": mark.status.value,
        }
        for event, mark in dated[:limit]
    ]
