"""
Match performance scorer

Scores a member's completed friendlies around a neutral 50. Goals and assists
favour attackers, so defensive roles also earn credit for the team's output
in matches they took part in and lose some for goals conceded.
"""

from collections import Counter
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Iterable, AbstractSet

from club.models import Member, Event, is_defensive_role
from .config import ScoringConfig, scoring_config
from .utils import clamp, iso


@dataclass
class MatchPerformance:
    """Match statistics and performance score for one member"""
    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    motm_count: int = 0
    matches_played: int = 0

    # defensive roles only
    is_defensive: bool = False
    goals_conceded: int = 0
    team_goals_supported: int = 0
    team_assists_supported: int = 0

    positive: float = 0.0
    negative: float = 0.0
    net: float = 0.0
    performance_score: float = 50.0

    recent_matches: list = field(default_factory=list)

    def to_dict(self):
        return asdict(self)


def _match_entry(event: Event, counts: Counter) -> dict:
    details = event.match_details
    return {
        "event_id": event.id,
        "date": iso(event.date),
        "opponent": event.opponent,
        "score": f"{details.team_score}:{details.opponent_score}",
        "result": details.outcome.value,
        "goals": counts["goals"],
        "assists": counts["assists"],
        "yellow_cards": counts["yellow_cards"],
        "red_cards": counts["red_cards"],
        "man_of_the_match": counts["motm"] > 0,
    }


def score_performance(
    member: Member,
    events: Iterable[Event],
    played_event_ids: AbstractSet[str] = frozenset(),
    config: Optional[ScoringConfig] = None,
) -> MatchPerformance:
    """Match performance for one member.

    Only completed friendlies with a match sheet count; other events are
    ignored, so the full event list can be passed in.

    Args:
        member: member being scored
        events: events of the snapshot
        played_event_ids: events the member turned up for (present or late);
            a member on the pitch with nothing on the match sheet still
            played that match
        config: scoring settings
    """
    config = config or scoring_config
    perf = MatchPerformance(is_defensive=is_defensive_role(member.position))
    involved: List[tuple] = []

    for event in events:
        if not event.is_completed_match:
            continue
        details = event.match_details

        counts = details.occurrences(member.id)
        perf.goals += counts["goals"]
        perf.assists += counts["assists"]
        perf.yellow_cards += counts["yellow_cards"]
        perf.red_cards += counts["red_cards"]
        perf.motm_count += counts["motm"]

        if not (details.involves(member.id) or event.id in played_event_ids):
            continue

        perf.matches_played += 1
        involved.append((event, counts))

        if perf.is_defensive:
            perf.goals_conceded += details.opponent_score
            perf.team_goals_supported += details.team_score
            perf.team_assists_supported += len(details.assists)

    positive = (
        perf.goals * config.goal_points
        + perf.assists * config.assist_points
        + perf.motm_count * config.motm_points
    )
    if perf.is_defensive:
        positive += (
            perf.team_goals_supported * config.team_goal_support_points
            + perf.team_assists_supported * config.team_assist_support_points
        )
        positive -= perf.goals_conceded * config.goal_conceded_penalty

    negative = perf.yellow_cards * config.yellow_card_penalty + perf.red_cards * config.red_card_penalty

    perf.positive = positive
    perf.negative = negative
    perf.net = positive - negative
    perf.performance_score = clamp(config.performance_baseline + perf.net * config.performance_multiplier)

    involved.sort(key=lambda pair: (pair[0].date, pair[0].id), reverse=True)
    perf.recent_matches = [_match_entry(e, c) for e, c in involved[:config.recent_matches_limit]]

    return perf
