"""Search strategy generation: AI-assisted, rule-based and emergency tiers."""

from .generator import StrategyGenerator
from .oracle import CategorizationOracle, HttpCategorizationOracle, NullOracle, build_oracle
from .plans import PLANS, ProviderPlan, QueryFamily

__all__ = [
    "CategorizationOracle",
    "HttpCategorizationOracle",
    "NullOracle",
    "PLANS",
    "ProviderPlan",
    "QueryFamily",
    "StrategyGenerator",
    "build_oracle",
]
