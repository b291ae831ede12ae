"""
Club Record Models

Pydantic models for the raw records supplied by the club's record store.
Field names accept the document-store camelCase spelling as aliases.
"""

from collections import Counter
from datetime import date, datetime
from typing import Optional, List, Any
from enum import Enum
import re

from pydantic import BaseModel, Field, field_validator


# =============================================
# Enums
# =============================================

class Position(str, Enum):
    """Playing or staff position"""
    goalkeeper = "Goalkeeper"
    centre_back = "Centre-back"
    left_back = "Left-back"
    right_back = "Right-back"
    sweeper = "Sweeper"
    defensive_midfielder = "Defensive Midfielder"
    central_midfielder = "Central Midfielder"
    attacking_midfielder = "Attacking Midfielder"
    left_midfielder = "Left Midfielder"
    right_midfielder = "Right Midfielder"
    left_winger = "Left Winger"
    right_winger = "Right Winger"
    centre_forward = "Centre Forward"
    striker = "Striker"
    second_striker = "Second Striker"
    coach = "Coach"
    manager = "Manager"


class MemberStatus(str, Enum):
    """Member status"""
    active = "active"
    inactive = "inactive"
    injured = "injured"
    suspended = "suspended"


class EventType(str, Enum):
    """Event type"""
    training = "training"
    friendly = "friendly"


class AttendanceStatus(str, Enum):
    """Attendance mark"""
    present = "present"
    absent = "absent"
    late = "late"
    excused = "excused"


class ContributionType(str, Enum):
    """Contribution type"""
    monetary = "monetary"
    in_kind = "in-kind"


class MatchResult(str, Enum):
    """Match result from the club's point of view"""
    win = "win"
    draw = "draw"
    loss = "loss"


class Venue(str, Enum):
    home = "home"
    away = "away"
    neutral = "neutral"


DEFENSIVE_ROLES = frozenset({
    Position.goalkeeper,
    Position.centre_back,
    Position.left_back,
    Position.right_back,
    Position.sweeper,
})

STAFF_ROLES = frozenset({Position.coach, Position.manager})


def is_defensive_role(position: Position) -> bool:
    """Goalkeepers and back-line players"""
    return position in DEFENSIVE_ROLES


def is_staff_role(position: Position) -> bool:
    """Coaches and managers, who are never compared against players"""
    return position in STAFF_ROLES


# =============================================
# Helpers
# =============================================

PERIOD_KEY_PATTERN = re.compile(r"^(\d{4})-(?:(0[1-9]|1[0-2])|Q([1-4]))$")


def _coerce_date(value: Any) -> Any:
    """Accept ISO datetime strings and datetime objects for date fields"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10 and value[10] in ("T", " "):
        return value[:10]
    return value


# =============================================
# Records
# =============================================

class Member(BaseModel):
    """Club member"""
    id: str = Field(..., min_length=1, description="Member ID")
    name: str = Field(..., description="Full name")
    position: Position = Field(..., description="Position")
    status: MemberStatus = Field(default=MemberStatus.active, description="Member status")
    date_joined: date = Field(..., alias="dateJoined", description="Date joined")
    jersey_number: Optional[int] = Field(None, alias="jerseyNumber", ge=0)

    @field_validator("date_joined", mode="before")
    @classmethod
    def coerce_date_joined(cls, v):
        return _coerce_date(v)

    @property
    def is_active(self) -> bool:
        return self.status == MemberStatus.active

    class Config:
        populate_by_name = True
        frozen = True


class MatchDetails(BaseModel):
    """Result of a completed friendly.

    ``home_score`` is always the club's own tally and ``away_score`` the
    opponent's, whatever the venue.
    """
    home_score: int = Field(default=0, alias="homeScore", ge=0)
    away_score: int = Field(default=0, alias="awayScore", ge=0)
    result: Optional[MatchResult] = None
    venue: Optional[Venue] = None
    goal_scorers: List[str] = Field(default_factory=list, alias="goalScorers")
    assists: List[str] = Field(default_factory=list)
    yellow_cards: List[str] = Field(default_factory=list, alias="yellowCards")
    red_cards: List[str] = Field(default_factory=list, alias="redCards")
    man_of_the_match: Optional[str] = Field(None, alias="manOfTheMatch")

    @field_validator("goal_scorers", "assists", "yellow_cards", "red_cards", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v

    @field_validator("man_of_the_match", mode="before")
    @classmethod
    def blank_as_none(cls, v):
        return v or None

    @property
    def team_score(self) -> int:
        return self.home_score

    @property
    def opponent_score(self) -> int:
        return self.away_score

    @property
    def outcome(self) -> MatchResult:
        """Recorded result, or the one implied by the score"""
        if self.result is not None:
            return self.result
        if self.home_score > self.away_score:
            return MatchResult.win
        if self.home_score < self.away_score:
            return MatchResult.loss
        return MatchResult.draw

    def involves(self, member_id: str) -> bool:
        """Whether the member shows up anywhere in the match sheet"""
        return (
            member_id in self.goal_scorers
            or member_id in self.assists
            or member_id in self.yellow_cards
            or member_id in self.red_cards
            or self.man_of_the_match == member_id
        )

    def occurrences(self, member_id: str) -> Counter:
        """Per-category occurrence counts for one member (duplicates count)"""
        counts = Counter()
        counts["goals"] = self.goal_scorers.count(member_id)
        counts["assists"] = self.assists.count(member_id)
        counts["yellow_cards"] = self.yellow_cards.count(member_id)
        counts["red_cards"] = self.red_cards.count(member_id)
        counts["motm"] = 1 if self.man_of_the_match == member_id else 0
        return counts

    class Config:
        populate_by_name = True
        frozen = True


class Event(BaseModel):
    """Training session or friendly match"""
    id: str = Field(..., min_length=1)
    type: EventType
    date: date
    opponent: Optional[str] = None
    is_completed: bool = Field(default=False, alias="isCompleted")
    match_details: Optional[MatchDetails] = Field(None, alias="matchDetails")

    @field_validator("date", mode="before")
    @classmethod
    def coerce_event_date(cls, v):
        return _coerce_date(v)

    @property
    def is_completed_match(self) -> bool:
        """Completed friendly with a match sheet"""
        return (
            self.type == EventType.friendly
            and self.is_completed
            and self.match_details is not None
        )

    class Config:
        populate_by_name = True
        frozen = True


class Attendance(BaseModel):
    """Attendance mark linking one member to one event"""
    id: Optional[str] = None
    event_id: str = Field(..., alias="eventId")
    member_id: str = Field(..., alias="memberId")
    status: AttendanceStatus

    class Config:
        populate_by_name = True
        frozen = True


class Contribution(BaseModel):
    """Monetary or in-kind contribution"""
    id: Optional[str] = None
    member_id: str = Field(..., alias="memberId")
    type: ContributionType
    amount: Optional[int] = Field(None, ge=0, description="Smallest whole currency unit")
    description: str = ""
    date: date
    event_id: Optional[str] = Field(None, alias="eventId")

    @field_validator("date", mode="before")
    @classmethod
    def coerce_contribution_date(cls, v):
        return _coerce_date(v)

    class Config:
        populate_by_name = True
        frozen = True


class FeePayment(BaseModel):
    """Membership fee payment for one billing period"""
    id: Optional[str] = None
    member_id: str = Field(..., alias="memberId")
    payment_date: date = Field(..., alias="paymentDate")
    period_covered: str = Field(..., alias="periodCovered", description="YYYY-MM or YYYY-QN")
    amount: int = Field(default=0, ge=0)

    @field_validator("payment_date", mode="before")
    @classmethod
    def coerce_payment_date(cls, v):
        return _coerce_date(v)

    @field_validator("period_covered")
    @classmethod
    def validate_period_covered(cls, v: str) -> str:
        v = v.strip().upper()
        if not PERIOD_KEY_PATTERN.match(v):
            raise ValueError(f"Invalid period key: {v} (expected YYYY-MM or YYYY-QN)")
        return v

    class Config:
        populate_by_name = True
        frozen = True
