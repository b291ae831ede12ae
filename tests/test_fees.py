"""
Membership fee status tests
"""

import pytest
from datetime import date

from club.models import MemberStatus
from analytics.config import FeeConfig
from analytics.fees import (
    FeeStanding,
    PaymentCadence,
    expand_period,
    period_key_for,
    fee_for_cadence,
    months_since_joining,
    next_due_date,
    compute_membership_status,
    compute_membership_statuses,
    summarize_fees,
)


class TestPeriodKeys:
    """Period key handling"""

    def test_monthly_key(self):
        assert expand_period("2024-11") == ["2024-11"]

    @pytest.mark.parametrize("key, months", [
        ("2024-Q1", ["2024-01", "2024-02", "2024-03"]),
        ("2024-Q4", ["2024-10", "2024-11", "2024-12"]),
    ])
    def test_quarter_expands_to_months(self, key, months):
        assert expand_period(key) == months

    def test_invalid_key(self):
        with pytest.raises(ValueError):
            expand_period("2024-W05")

    def test_period_key_for(self):
        assert period_key_for(date(2025, 2, 14)) == "2025-02"
        assert period_key_for(date(2025, 2, 14), PaymentCadence.quarterly) == "2025-Q1"
        assert period_key_for(date(2025, 11, 1), "quarterly") == "2025-Q4"

    def test_fee_for_cadence(self):
        assert fee_for_cadence(PaymentCadence.monthly) == 15000
        assert fee_for_cadence("quarterly") == 45000
        assert fee_for_cadence("monthly", FeeConfig(monthly_fee=20000)) == 20000


class TestDates:

    def test_months_since_joining_counts_both_ends(self, today):
        assert months_since_joining(date(2025, 1, 10), today) == 3
        assert months_since_joining(date(2025, 3, 31), today) == 1
        assert months_since_joining(date(2024, 11, 2), today) == 5

    def test_future_joiner_owes_nothing(self, today):
        assert months_since_joining(date(2025, 6, 1), today) == 0

    def test_next_due_date(self, today):
        assert next_due_date(today) == date(2025, 4, 1)
        assert next_due_date(date(2025, 12, 5)) == date(2026, 1, 1)


class TestMembershipStatus:
    """Per-member fee standing"""

    def test_no_payments_overdue(self, make_member, today):
        m = make_member("m", date_joined=date(2025, 1, 10))

        status = compute_membership_status(m, [], today)

        assert status.status == FeeStanding.overdue
        assert status.months_since_joining == 3
        assert status.months_owed == 3
        assert status.total_owed == 45000
        assert status.last_payment_date is None
        assert status.next_due_date == "2025-04-01"

    def test_quarterly_payment_covers_quarter(self, make_member, make_payment, today):
        m = make_member("m", date_joined=date(2025, 1, 10))

        status = compute_membership_status(m, [make_payment("m", "2025-Q1", amount=45000)], today)

        assert status.status == FeeStanding.current
        assert status.months_paid == 3
        assert status.months_owed == 0
        assert status.paid_periods == ["2025-01", "2025-02", "2025-03"]
        assert status.last_period_covered == "2025-Q1"

    def test_paid_ahead(self, make_member, make_payment, today):
        m = make_member("m", date_joined=date(2025, 1, 10))
        payments = [make_payment("m", "2025-Q1"), make_payment("m", "2025-04", paid_on=date(2025, 3, 10))]

        status = compute_membership_status(m, payments, today)

        assert status.status == FeeStanding.paid_ahead
        assert status.months_owed == 0
        assert status.last_payment_date == "2025-03-10"
        assert status.last_period_covered == "2025-04"

    def test_overlapping_periods_count_once(self, make_member, make_payment, today):
        m = make_member("m", date_joined=date(2025, 1, 10))
        payments = [make_payment("m", "2025-01"), make_payment("m", "2025-Q1")]

        status = compute_membership_status(m, payments, today)

        assert status.months_paid == 3
        assert status.status == FeeStanding.current

    def test_partial_payment_owes_rest(self, make_member, make_payment, today):
        m = make_member("m", date_joined=date(2024, 11, 2))
        payments = [make_payment("m", "2024-11"), make_payment("m", "2024-12")]

        status = compute_membership_status(m, payments, today)

        assert status.months_owed == 3
        assert status.total_owed == 45000

    def test_custom_monthly_fee(self, make_member, today):
        m = make_member("m", date_joined=date(2025, 3, 1))
        status = compute_membership_status(m, [], today, FeeConfig(monthly_fee=20000))
        assert status.total_owed == 20000

    def test_to_dict_uses_plain_status(self, make_member, today):
        m = make_member("m", date_joined=date(2025, 3, 1))
        assert compute_membership_status(m, [], today).to_dict()["status"] == "overdue"


class TestMembershipStatuses:
    """Club-wide fee status"""

    def test_only_active_members_sorted_by_name(self, make_member, today):
        members = [
            make_member("m1", name="zoe"),
            make_member("m2", name="Adam"),
            make_member("m3", name="Hurt", status=MemberStatus.injured),
            make_member("m4", name="Gone", status=MemberStatus.inactive),
        ]

        statuses = compute_membership_statuses(members, [], today)

        assert [s.name for s in statuses] == ["Adam", "zoe"]

    def test_orphan_payments_ignored(self, make_member, make_payment, today):
        members = [make_member("m1", date_joined=date(2025, 3, 1))]
        payments = [make_payment("ghost", "2025-03")]

        statuses = compute_membership_statuses(members, payments, today)

        assert statuses[0].months_paid == 0

    def test_summary(self, make_member, make_payment, today):
        members = [
            make_member("m1", name="A", date_joined=date(2025, 1, 10)),
            make_member("m2", name="B", date_joined=date(2025, 2, 1)),
            make_member("m3", name="C", date_joined=date(2025, 3, 1)),
            make_member("m4", name="D", status=MemberStatus.suspended),
        ]
        payments = [
            make_payment("m1", "2025-Q1", amount=45000),
            make_payment("m3", "2025-03"),
            make_payment("m3", "2025-04"),
            make_payment("m4", "2025-01"),
        ]

        statuses = compute_membership_statuses(members, payments, today)
        summary = summarize_fees(statuses, payments)

        assert summary.tracked_members == 3
        assert summary.current_count == 1
        assert summary.overdue_count == 1
        assert summary.paid_ahead_count == 1
        assert summary.total_outstanding == 30000
        assert summary.total_collected == 75000
        assert summary.currency == "UGX"
