"""
Rating aggregator

Combines the attendance, match performance and contribution scores into one
overall rating per member.

Overall rating = round(attendance*0.45 + performance*0.30 + contribution*0.15).
The weights sum to 0.90, so the rating tops out at 90.
"""

from collections import defaultdict
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Sequence

from loguru import logger

from club.models import Member, Event, Attendance, Contribution, AttendanceStatus
from .attendance import AttendanceSummary, summarize_attendance, compute_cohort_baseline
from .performance import MatchPerformance, score_performance
from .contributions import ContributionSummary, score_contributions
from .snapshot import ClubSnapshot, build_snapshot
from .config import ScoringConfig, scoring_config
from .utils import round_half_up


RATING_LABELS = [
    (80, "Excellent"),
    (60, "Good"),
    (40, "Average"),
]


def rating_label(rating: int) -> str:
    """Label shown next to an overall rating"""
    for threshold, label in RATING_LABELS:
        if rating >= threshold:
            return label
    return "Needs Improvement"


def aggregate_rating(
    attendance_score: float,
    performance_score: float,
    contribution_score: float,
    config: Optional[ScoringConfig] = None,
) -> int:
    """Weighted overall rating, rounded half up"""
    config = config or scoring_config
    return round_half_up(
        attendance_score * config.attendance_weight
        + performance_score * config.performance_weight
        + contribution_score * config.contribution_weight
    )


@dataclass
class PlayerAnalytics:
    """Full analytics record for one member"""
    member_id: str
    name: str
    position: str
    status: str

    attendance: AttendanceSummary = field(default_factory=AttendanceSummary)
    performance: MatchPerformance = field(default_factory=MatchPerformance)
    contributions: ContributionSummary = field(default_factory=ContributionSummary)

    attendance_score: float = 0.0
    performance_score: float = 50.0
    contribution_score: float = 0.0
    overall_rating: int = 0
    rating_grade: str = ""

    def to_dict(self):
        return asdict(self)


class ClubAnalyzer:
    """Player analytics over one snapshot.

    Records are indexed by member once; each ``analyze_*`` call is a pure
    function of the snapshot and the scoring settings.
    """

    def __init__(self, snapshot: ClubSnapshot, config: Optional[ScoringConfig] = None):
        self.snapshot = snapshot
        self.config = config or scoring_config

        self.events_by_id: Dict[str, Event] = {e.id: e for e in snapshot.events}
        self.matches: List[Event] = list(snapshot.completed_matches)

        self.attendance_by_member: Dict[str, List[Attendance]] = defaultdict(list)
        for a in snapshot.attendance:
            self.attendance_by_member[a.member_id].append(a)

        self.contributions_by_member: Dict[str, List[Contribution]] = defaultdict(list)
        for c in snapshot.contributions:
            self.contributions_by_member[c.member_id].append(c)

        self.cohort_baseline = compute_cohort_baseline(snapshot.members, snapshot.attendance)

        logger.debug(
            f"ClubAnalyzer ready: {len(snapshot.members)} members, {len(self.matches)} completed matches, "
            f"cohort baseline {self.cohort_baseline}"
        )

    @classmethod
    def from_records(
        cls,
        members: Sequence[Member] = (),
        events: Sequence[Event] = (),
        attendance: Sequence[Attendance] = (),
        contributions: Sequence[Contribution] = (),
        config: Optional[ScoringConfig] = None,
    ) -> "ClubAnalyzer":
        snapshot = build_snapshot(members, events, attendance, contributions)
        return cls(snapshot, config)

    def _played_event_ids(self, member_id: str) -> frozenset:
        return frozenset(
            a.event_id for a in self.attendance_by_member.get(member_id, [])
            if a.status in (AttendanceStatus.present, AttendanceStatus.late)
        )

    def analyze_member(self, member: Member) -> PlayerAnalytics:
        """Analytics record for one member of the snapshot"""
        attendance = summarize_attendance(
            member,
            self.attendance_by_member.get(member.id, []),
            events=self.events_by_id,
            baseline=self.cohort_baseline,
            config=self.config,
        )
        performance = score_performance(
            member,
            self.matches,
            played_event_ids=self._played_event_ids(member.id),
            config=self.config,
        )
        contributions = score_contributions(
            member,
            self.contributions_by_member.get(member.id, []),
            config=self.config,
        )

        analytics = PlayerAnalytics(
            member_id=member.id,
            name=member.name,
            position=member.position.value,
            status=member.status.value,
            attendance=attendance,
            performance=performance,
            contributions=contributions,
        )
        analytics.attendance_score = attendance.normalized_rate
        analytics.performance_score = performance.performance_score
        analytics.contribution_score = contributions.contribution_score
        analytics.overall_rating = aggregate_rating(
            analytics.attendance_score,
            analytics.performance_score,
            analytics.contribution_score,
            self.config,
        )
        analytics.rating_grade = rating_label(analytics.overall_rating)
        return analytics

    def analyze_all(self) -> List[PlayerAnalytics]:
        """One record per member, in snapshot order"""
        results = [self.analyze_member(m) for m in self.snapshot.members]
        logger.info(f"Computed analytics for {len(results)} members")
        return results


def compute_player_analytics(
    members: Sequence[Member],
    events: Sequence[Event] = (),
    attendance: Sequence[Attendance] = (),
    contributions: Sequence[Contribution] = (),
    config: Optional[ScoringConfig] = None,
) -> List[PlayerAnalytics]:
    """Analytics for every member of the given collections"""
    return ClubAnalyzer.from_records(members, events, attendance, contributions, config).analyze_all()
