"""
Analytics settings

Scoring multipliers and fee amounts, overridable through the environment
(``SCORING_*`` / ``FEE_*``) or a ``.env`` file.
"""
from pydantic_settings import BaseSettings
from pydantic import Field
from dotenv import load_dotenv

load_dotenv()


class ScoringConfig(BaseSettings):
    """Player rating settings"""

    # Match performance
    goal_points: float = Field(default=3.0, description="Points per goal")
    assist_points: float = Field(default=2.0, description="Points per assist")
    motm_points: float = Field(default=5.0, description="Points per man-of-the-match award")
    team_goal_support_points: float = Field(default=0.5, description="Defensive roles: per team goal in involved matches")
    team_assist_support_points: float = Field(default=0.3, description="Defensive roles: per team assist in involved matches")
    goal_conceded_penalty: float = Field(default=1.5, description="Defensive roles: per goal conceded")
    yellow_card_penalty: float = Field(default=1.0)
    red_card_penalty: float = Field(default=3.0)
    performance_baseline: float = Field(default=50.0, description="Score of a member with no match involvement")
    performance_multiplier: float = Field(default=2.0)

    # Contributions
    contribution_count_points: float = Field(default=10.0, description="Points per contribution")
    contribution_amount_divisor: int = Field(default=10000, gt=0, description="Currency units per point")

    # Overall rating (sums to 0.90)
    attendance_weight: float = 0.45
    performance_weight: float = 0.30
    contribution_weight: float = 0.15

    # Recent activity slices
    recent_matches_limit: int = 5
    recent_contributions_limit: int = 10
    recent_attendance_limit: int = 10

    class Config:
        env_prefix = "SCORING_"
        case_sensitive = False
        env_file = ".env"
        extra = "ignore"


class FeeConfig(BaseSettings):
    """Membership fee settings"""

    monthly_fee: int = Field(default=15000, ge=0, description="Fee per month (smallest currency unit)")
    quarterly_fee: int = Field(default=45000, ge=0, description="Fee per quarter")
    currency: str = "UGX"

    class Config:
        env_prefix = "FEE_"
        case_sensitive = False
        env_file = ".env"
        extra = "ignore"


scoring_config = ScoringConfig()
fee_config = FeeConfig()
