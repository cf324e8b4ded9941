from src.bidding_engine.models import (
    AdvancedCompetitionAnalysis,
    BiddingRecommendation,
    NominationRecommendation,
)
from src.bidding_engine.planner import (
    calculate_budget_allocation,
    get_nomination_recommendations,
)
from src.bidding_engine.recommendation import get_bidding_recommendation
from src.bidding_engine.threat_assessment import generate_advanced_competition_analysis

__all__ = [
    "AdvancedCompetitionAnalysis",
    "BiddingRecommendation",
    "NominationRecommendation",
    "calculate_budget_allocation",
    "generate_advanced_competition_analysis",
    "get_bidding_recommendation",
    "get_nomination_recommendations",
]
