"""
Pytest configuration and fixtures for club analytics tests
"""

import pytest
import sys
from datetime import date
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from club.models import (
    Member,
    Event,
    MatchDetails,
    Attendance,
    Contribution,
    FeePayment,
    Position,
    MemberStatus,
    EventType,
    AttendanceStatus,
    ContributionType,
)


@pytest.fixture(scope="session")
def today():
    """Reference date for fee tests"""
    return date(2025, 3, 15)


@pytest.fixture
def make_member():
    """Member factory"""
    def _make(member_id, position=Position.striker, status=MemberStatus.active,
              date_joined=date(2024, 8, 1), name=None):
        return Member(
            id=member_id,
            name=name or f"Player {member_id}",
            position=position,
            status=status,
            date_joined=date_joined,
        )
    return _make


@pytest.fixture
def make_training():
    """Training session factory"""
    def _make(event_id, on=date(2025, 1, 1)):
        return Event(id=event_id, type=EventType.training, date=on)
    return _make


@pytest.fixture
def make_match():
    """Completed friendly factory"""
    def _make(event_id, on=date(2025, 1, 1), home=0, away=0, scorers=(), assists=(),
              yellow=(), red=(), motm=None, opponent="Opponent FC"):
        return Event(
            id=event_id,
            type=EventType.friendly,
            date=on,
            opponent=opponent,
            is_completed=True,
            match_details=MatchDetails(
                home_score=home,
                away_score=away,
                goal_scorers=list(scorers),
                assists=list(assists),
                yellow_cards=list(yellow),
                red_cards=list(red),
                man_of_the_match=motm,
            ),
        )
    return _make


@pytest.fixture
def mark():
    """Attendance mark factory"""
    def _make(member_id, event_id, status=AttendanceStatus.present):
        return Attendance(member_id=member_id, event_id=event_id, status=status)
    return _make


@pytest.fixture
def make_contribution():
    """Contribution factory"""
    def _make(member_id, amount=None, on=date(2025, 1, 1), contribution_id=None, description=""):
        return Contribution(
            id=contribution_id,
            member_id=member_id,
            type=ContributionType.monetary if amount is not None else ContributionType.in_kind,
            amount=amount,
            description=description,
            date=on,
        )
    return _make


@pytest.fixture
def make_payment():
    """Fee payment factory"""
    def _make(member_id, period, paid_on=date(2025, 1, 5), amount=15000):
        return FeePayment(member_id=member_id, payment_date=paid_on, period_covered=period, amount=amount)
    return _make


@pytest.fixture
def sample_snapshot_data():
    """Document-store style snapshot (camelCase keys)"""
    return {
        "members": [
            {"id": "m1", "name": "Alice Nakato", "position": "Goalkeeper", "status": "active",
             "dateJoined": "2025-01-10T09:00:00Z", "jerseyNumber": 1},
            {"id": "m2", "name": "Brian Okello", "position": "Striker", "status": "active",
             "dateJoined": "2024-11-02"},
            {"id": "m3", "name": "Coach Daniel", "position": "Coach", "status": "active",
             "dateJoined": "2024-08-01"},
            {"id": "m4", "name": "Eva Achieng", "position": "Left Winger", "status": "injured",
             "dateJoined": "2024-08-01"},
        ],
        "events": [
            {"id": "t1", "type": "training", "date": "2025-01-04"},
            {"id": "t2", "type": "training", "date": "2025-01-11"},
            {"id": "f1", "type": "friendly", "date": "2025-01-18", "opponent": "Kampala United",
             "isCompleted": True,
             "matchDetails": {"homeScore": 3, "awayScore": 1, "result": "win",
                              "goalScorers": ["m2", "m2", "m4"], "assists": ["m4"],
                              "yellowCards": ["m2"], "redCards": [], "manOfTheMatch": "m2",
                              "venue": "home"}},
        ],
        "attendance": [
            {"id": "a1", "eventId": "t1", "memberId": "m1", "status": "present"},
            {"id": "a2", "eventId": "t2", "memberId": "m1", "status": "present"},
            {"id": "a3", "eventId": "f1", "memberId": "m1", "status": "present"},
            {"id": "a4", "eventId": "t1", "memberId": "m2", "status": "present"},
            {"id": "a5", "eventId": "t2", "memberId": "m2", "status": "late"},
            {"id": "a6", "eventId": "t1", "memberId": "m3", "status": "present"},
            {"id": "a7", "eventId": "t2", "memberId": "m3", "status": "absent"},
            {"id": "a8", "eventId": "t1", "memberId": "ghost", "status": "present"},
        ],
        "contributions": [
            {"id": "c1", "memberId": "m2", "type": "monetary", "amount": 50000,
             "description": "Match balls", "date": "2025-01-20"},
            {"id": "c2", "memberId": "m1", "type": "in-kind", "description": "Water",
             "date": "2025-01-21"},
        ],
        "feePayments": [
            {"id": "p1", "memberId": "m1", "paymentDate": "2025-01-12", "periodCovered": "2025-Q1",
             "amount": 45000},
            {"id": "p2", "memberId": "m2", "paymentDate": "2024-11-05", "periodCovered": "2024-11",
             "amount": 15000},
            {"id": "p3", "memberId": "m2", "paymentDate": "2024-12-05", "periodCovered": "2024-12",
             "amount": 15000},
            {"id": "p4", "memberId": "m2", "paymentDate": "2025-01-05", "periodCovered": "bad-key",
             "amount": 15000},
        ],
    }
