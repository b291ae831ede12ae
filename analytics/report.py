"""
Post-processing views over computed player analytics.

Filtering, sorting and the team summary never touch the per-member
computation; they only select and order existing records.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, List, Sequence, Union

from club.models import Position, MemberStatus
from .rating import PlayerAnalytics
from .utils import round_half_up


class SortKey(str, Enum):
    """Sort keys offered to callers"""
    rating = "rating"
    attendance = "attendance"
    performance = "performance"
    contributions = "contributions"
    name = "name"


_SORT_FIELDS = {
    SortKey.rating: lambda p: p.overall_rating,
    SortKey.attendance: lambda p: p.attendance_score,
    SortKey.performance: lambda p: p.performance_score,
    SortKey.contributions: lambda p: p.contribution_score,
    SortKey.name: lambda p: p.name.lower(),
}


def _value(v) -> Optional[str]:
    return v.value if isinstance(v, Enum) else v


def filter_analytics(
    analytics: Sequence[PlayerAnalytics],
    position: Union[Position, str, None] = None,
    status: Union[MemberStatus, str, None] = None,
) -> List[PlayerAnalytics]:
    """Keep records matching the position and status filters ("all"/None = no filter)"""
    position = _value(position)
    status = _value(status)

    result = []
    for p in analytics:
        if position not in (None, "all") and p.position != position:
            continue
        if status not in (None, "all") and p.status != status:
            continue
        result.append(p)
    return result


def sort_analytics(
    analytics: Sequence[PlayerAnalytics],
    key: Union[SortKey, str] = SortKey.rating,
    descending: bool = True,
) -> List[PlayerAnalytics]:
    """Sorted copy; ties fall back to name, then member ID"""
    try:
        key = SortKey(key)
    except ValueError:
        raise ValueError(f"Unknown sort key: {key} (expected one of {[k.value for k in SortKey]})")

    # name/ID tie-break always ascending, so sort by it first and rely on stability
    ordered = sorted(analytics, key=lambda p: (p.name.lower(), p.member_id))
    return sorted(ordered, key=_SORT_FIELDS[key], reverse=descending)


def select_analytics(
    analytics: Sequence[PlayerAnalytics],
    position: Union[Position, str, None] = None,
    status: Union[MemberStatus, str, None] = None,
    sort_by: Union[SortKey, str] = SortKey.rating,
    descending: bool = True,
    limit: Optional[int] = None,
) -> List[PlayerAnalytics]:
    """Filter, then sort, then optionally cut to the first ``limit`` records"""
    result = sort_analytics(filter_analytics(analytics, position, status), sort_by, descending)
    if limit is not None:
        result = result[:max(limit, 0)]
    return result


@dataclass
class TeamSummary:
    """Club-wide headline figures (active members only)"""
    total_players: int = 0
    average_rating: int = 0
    top_performer: Optional[PlayerAnalytics] = None
    attendance_leader: Optional[PlayerAnalytics] = None
    top_scorer: Optional[PlayerAnalytics] = None

    def to_dict(self):
        return asdict(self)


def summarize_team(analytics: Sequence[PlayerAnalytics]) -> TeamSummary:
    """Average rating and leaders among active members.

    Leaders are the first record reaching the maximum, in input order.
    """
    active = [p for p in analytics if p.status == MemberStatus.active.value]
    if not active:
        return TeamSummary()

    top_performer = active[0]
    attendance_leader = active[0]
    top_scorer = active[0]
    for p in active[1:]:
        if p.overall_rating > top_performer.overall_rating:
            top_performer = p
        if (p.attendance_score, p.attendance.attended) > (
            attendance_leader.attendance_score, attendance_leader.attendance.attended
        ):
            attendance_leader = p
        if p.performance.goals > top_scorer.performance.goals:
            top_scorer = p

    return TeamSummary(
        total_players=len(active),
        average_rating=round_half_up(sum(p.overall_rating for p in active) / len(active)),
        top_performer=top_performer,
        attendance_leader=attendance_leader,
        top_scorer=top_scorer,
    )
