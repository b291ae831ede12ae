"""
Club performance & fee analytics engine

Turns raw club records into per-member attendance, match performance and
contribution scores, an overall rating, and membership fee standing.
"""
from .config import ScoringConfig, FeeConfig, scoring_config, fee_config
from .snapshot import (
    ClubSnapshot,
    IntegrityIssue,
    IntegrityReport,
    IssueSeverity,
    build_snapshot,
    load_snapshot,
)
from .attendance import AttendanceSummary, summarize_attendance, compute_cohort_baseline
from .performance import MatchPerformance, score_performance
from .contributions import ContributionSummary, score_contributions
from .rating import (
    PlayerAnalytics,
    ClubAnalyzer,
    aggregate_rating,
    rating_label,
    compute_player_analytics,
)
from .report import (
    SortKey,
    TeamSummary,
    filter_analytics,
    sort_analytics,
    select_analytics,
    summarize_team,
)
from .fees import (
    FeeStanding,
    PaymentCadence,
    MembershipStatus,
    FeeSummary,
    expand_period,
    period_key_for,
    fee_for_cadence,
    months_since_joining,
    compute_membership_status,
    compute_membership_statuses,
    summarize_fees,
)

__all__ = [
    # Settings
    "ScoringConfig",
    "FeeConfig",
    "scoring_config",
    "fee_config",
    # Snapshot
    "ClubSnapshot",
    "IntegrityIssue",
    "IntegrityReport",
    "IssueSeverity",
    "build_snapshot",
    "load_snapshot",
    # Scorers
    "AttendanceSummary",
    "summarize_attendance",
    "compute_cohort_baseline",
    "MatchPerformance",
    "score_performance",
    "ContributionSummary",
    "score_contributions",
    # Rating
    "PlayerAnalytics",
    "ClubAnalyzer",
    "aggregate_rating",
    "rating_label",
    "compute_player_analytics",
    # Views
    "SortKey",
    "TeamSummary",
    "filter_analytics",
    "sort_analytics",
    "select_analytics",
    "summarize_team",
    # Fees
    "FeeStanding",
    "PaymentCadence",
    "MembershipStatus",
    "FeeSummary",
    "expand_period",
    "period_key_for",
    "fee_for_cadence",
    "months_since_joining",
    "compute_membership_status",
    "compute_membership_statuses",
    "summarize_fees",
]
