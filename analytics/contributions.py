"""
Contribution scorer
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, Iterable

from club.models import Member, Contribution, ContributionType
from .config import ScoringConfig, scoring_config
from .utils import clamp, iso


@dataclass
class ContributionSummary:
    """Contribution figures for one member"""
    total_contributions: int = 0
    monetary_count: int = 0
    in_kind_count: int = 0
    monetary_total: int = 0
    contribution_score: float = 0.0
    recent_contributions: list = field(default_factory=list)

    def to_dict(self):
        return asdict(self)


def score_contributions(
    member: Member,
    contributions: Iterable[Contribution],
    config: Optional[ScoringConfig] = None,
) -> ContributionSummary:
    """Every contribution earns fixed points; money adds one point per divisor unit"""
    config = config or scoring_config
    records = [c for c in contributions if c.member_id == member.id]

    summary = ContributionSummary()
    summary.total_contributions = len(records)
    summary.monetary_count = sum(1 for c in records if c.type == ContributionType.monetary)
    summary.in_kind_count = sum(1 for c in records if c.type == ContributionType.in_kind)
    summary.monetary_total = sum(
        c.amount for c in records if c.type == ContributionType.monetary and c.amount
    )
    summary.contribution_score = clamp(
        summary.total_contributions * config.contribution_count_points
        + summary.monetary_total / config.contribution_amount_divisor
    )

    recent = sorted(records, key=lambda c: (c.date, c.id or ""), reverse=True)
    summary.recent_contributions = [
        {
            "id": c.id,
            "date": iso(c.date),
            "type": c.type.value,
            "amount": c.amount,
            "description": c.description,
        }
        for c in recent[:config.recent_contributions_limit]
    ]

    return summary
