"""
Contribution scorer tests
"""

from datetime import date, timedelta

from analytics.contributions import score_contributions


class TestScoreContributions:
    """Contribution score"""

    def test_no_contributions(self, make_member):
        summary = score_contributions(make_member("m"), [])
        assert summary.contribution_score == 0.0
        assert summary.recent_contributions == []

    def test_ten_in_kind_contributions_max_out(self, make_member, make_contribution):
        m = make_member("m")
        contributions = [make_contribution("m", contribution_id=f"c{i}") for i in range(10)]

        summary = score_contributions(m, contributions)

        assert summary.in_kind_count == 10
        assert summary.monetary_total == 0
        assert summary.contribution_score == 100.0

    def test_money_adds_one_point_per_ten_thousand(self, make_member, make_contribution):
        m = make_member("m")
        contributions = [make_contribution("m", amount=50000), make_contribution("m", amount=30000)]

        summary = score_contributions(m, contributions)

        assert summary.monetary_count == 2
        assert summary.monetary_total == 80000
        assert summary.contribution_score == 28.0

    def test_capped_at_100(self, make_member, make_contribution):
        summary = score_contributions(make_member("m"), [make_contribution("m", amount=5_000_000)])
        assert summary.contribution_score == 100.0

    def test_other_members_ignored(self, make_member, make_contribution):
        summary = score_contributions(make_member("m"), [make_contribution("x", amount=10000)])
        assert summary.total_contributions == 0

    def test_recent_slice(self, make_member, make_contribution):
        m = make_member("m")
        start = date(2025, 1, 1)
        contributions = [
            make_contribution("m", on=start + timedelta(days=i), contribution_id=f"c{i:02d}")
            for i in range(12)
        ]

        summary = score_contributions(m, contributions)

        assert len(summary.recent_contributions) == 10
        assert summary.recent_contributions[0]["id"] == "c11"
        assert summary.recent_contributions[-1]["id"] == "c02"
        assert summary.recent_contributions[0]["type"] == "in-kind"
