"""
Membership fee status engine

Reconstructs, per active member, how many months have been paid against how
many have elapsed since joining. The unit of account is always the month: a
quarterly payment (``YYYY-QN``) covers the three monthly keys of its quarter.
"""

from dataclasses import dataclass, field, asdict
from datetime import date
from enum import Enum
from typing import Optional, List, Dict, Sequence, Iterable

from loguru import logger

from club.models import Member, FeePayment, PERIOD_KEY_PATTERN
from .config import FeeConfig, fee_config
from .utils import iso


class FeeStanding(str, Enum):
    """Membership fee standing"""
    current = "current"
    overdue = "overdue"
    paid_ahead = "paid_ahead"


class PaymentCadence(str, Enum):
    """Billing cadence a payment was made under"""
    monthly = "monthly"
    quarterly = "quarterly"


@dataclass
class MembershipStatus:
    """Fee standing of one active member"""
    member_id: str
    name: str
    status: FeeStanding = FeeStanding.current
    last_payment_date: Optional[str] = None
    last_period_covered: Optional[str] = None
    months_since_joining: int = 0
    months_paid: int = 0
    months_owed: int = 0
    total_owed: int = 0
    paid_periods: List[str] = field(default_factory=list)
    next_due_date: str = ""

    def to_dict(self):
        d = asdict(self)
        d["status"] = self.status.value
        return d


# =====================================================
# Period keys
# =====================================================

def expand_period(key: str) -> List[str]:
    """Monthly keys covered by a period key.

    >>> expand_period("2024-03")
    ['2024-03']
    >>> expand_period("2024-Q2")
    ['2024-04', '2024-05', '2024-06']
    """
    match = PERIOD_KEY_PATTERN.match(key.strip().upper())
    if not match:
        raise ValueError(f"Invalid period key: {key}")

    year, month, quarter = match.groups()
    if month:
        return [f"{year}-{month}"]
    first = (int(quarter) - 1) * 3 + 1
    return [f"{year}-{m:02d}" for m in range(first, first + 3)]


def period_key_for(payment_date: date, cadence: PaymentCadence = PaymentCadence.monthly) -> str:
    """Period key a payment made on ``payment_date`` covers"""
    cadence = PaymentCadence(cadence)
    if cadence == PaymentCadence.monthly:
        return f"{payment_date.year}-{payment_date.month:02d}"
    quarter = (payment_date.month - 1) // 3 + 1
    return f"{payment_date.year}-Q{quarter}"


def fee_for_cadence(cadence: PaymentCadence, config: Optional[FeeConfig] = None) -> int:
    """Expected amount of one payment under a cadence"""
    config = config or fee_config
    cadence = PaymentCadence(cadence)
    if cadence == PaymentCadence.quarterly:
        return config.quarterly_fee
    return config.monthly_fee


def paid_months(payments: Iterable[FeePayment]) -> List[str]:
    """Sorted distinct monthly keys covered by the payments"""
    months = set()
    for p in payments:
        months.update(expand_period(p.period_covered))
    return sorted(months)


# =====================================================
# Status computation
# =====================================================

def months_since_joining(date_joined: date, today: date) -> int:
    """Billing months elapsed, counting the joining month and the current one"""
    months = (today.year - date_joined.year) * 12 + (today.month - date_joined.month) + 1
    return max(0, months)


def next_due_date(today: date) -> date:
    """First day of the month after ``today``"""
    if today.month == 12:
        return date(today.year + 1, 1, 1)
    return date(today.year, today.month + 1, 1)


def compute_membership_status(
    member: Member,
    payments: Iterable[FeePayment],
    today: Optional[date] = None,
    config: Optional[FeeConfig] = None,
) -> MembershipStatus:
    """Fee standing of one member from that member's payments"""
    config = config or fee_config
    today = today or date.today()
    payments = [p for p in payments if p.member_id == member.id]

    periods = paid_months(payments)
    elapsed = months_since_joining(member.date_joined, today)
    owed = max(0, elapsed - len(periods))

    if owed > 0:
        standing = FeeStanding.overdue
    elif len(periods) > elapsed:
        standing = FeeStanding.paid_ahead
    else:
        standing = FeeStanding.current

    last_payment = max(payments, key=lambda p: (p.payment_date, expand_period(p.period_covered)[-1]), default=None)

    return MembershipStatus(
        member_id=member.id,
        name=member.name,
        status=standing,
        last_payment_date=iso(last_payment.payment_date) if last_payment else None,
        last_period_covered=last_payment.period_covered if last_payment else None,
        months_since_joining=elapsed,
        months_paid=len(periods),
        months_owed=owed,
        total_owed=owed * config.monthly_fee,
        paid_periods=periods,
        next_due_date=next_due_date(today).isoformat(),
    )


def compute_membership_statuses(
    members: Sequence[Member],
    payments: Sequence[FeePayment],
    today: Optional[date] = None,
    config: Optional[FeeConfig] = None,
) -> List[MembershipStatus]:
    """Fee standing of every active member, ordered by name.

    Inactive, injured and suspended members are not tracked. Payments for
    members outside ``members`` are ignored.
    """
    today = today or date.today()

    by_member: Dict[str, List[FeePayment]] = {}
    for p in payments:
        by_member.setdefault(p.member_id, []).append(p)

    active = [m for m in members if m.is_active]
    statuses = [
        compute_membership_status(m, by_member.get(m.id, []), today, config)
        for m in active
    ]
    statuses.sort(key=lambda s: (s.name.lower(), s.member_id))

    known = {m.id for m in members}
    orphaned = sum(len(v) for k, v in by_member.items() if k not in known)
    if orphaned:
        logger.warning(f"Ignored {orphaned} fee payment(s) for unknown members")

    logger.info(
        f"Fee status: {len(statuses)} active members, "
        f"{sum(1 for s in statuses if s.status == FeeStanding.overdue)} overdue"
    )
    return statuses


@dataclass
class FeeSummary:
    """Club-wide fee figures"""
    tracked_members: int = 0
    current_count: int = 0
    overdue_count: int = 0
    paid_ahead_count: int = 0
    total_outstanding: int = 0
    total_collected: int = 0
    currency: str = "UGX"

    def to_dict(self):
        return asdict(self)


def summarize_fees(
    statuses: Sequence[MembershipStatus],
    payments: Sequence[FeePayment] = (),
    config: Optional[FeeConfig] = None,
) -> FeeSummary:
    """Counts per standing, amount outstanding and amount collected from tracked members"""
    config = config or fee_config
    tracked = {s.member_id for s in statuses}
    return FeeSummary(
        tracked_members=len(statuses),
        current_count=sum(1 for s in statuses if s.status == FeeStanding.current),
        overdue_count=sum(1 for s in statuses if s.status == FeeStanding.overdue),
        paid_ahead_count=sum(1 for s in statuses if s.status == FeeStanding.paid_ahead),
        total_outstanding=sum(s.total_owed for s in statuses),
        total_collected=sum(p.amount for p in payments if p.member_id in tracked),
        currency=config.currency,
    )
