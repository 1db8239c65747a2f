"""Three-tier search strategy generation (AI, rule-based, emergency)."""

import logging
from datetime import date
from typing import List, Optional, Tuple

from ..adapters.base import BaseAdapter
from ..models import (
    Categories,
    Project,
    ProjectPairing,
    SearchConfiguration,
    StrategyInsight,
    StrategyOrigin,
    UserProfile,
)
from .oracle import CategorizationOracle, NullOracle
from .plans import EMERGENCY_KIND, EMERGENCY_PAGE_SIZE, PLANS, ProviderPlan, QueryFamily
from .prompts import get_prompt_for_kind
from .rules import merge_rule_buckets

logger = logging.getLogger(__name__)

# Rule-based queries are added when the AI tier yields fewer than this many
MIN_AI_CONFIGURATIONS = 5


class StrategyGenerator:
    """Builds the ordered list of SearchConfigurations for one provider run.

    Given the same inputs (and the same oracle answers) the output is
    identical, element for element; `today` is passed in rather than read
    from the clock.
    """

    def __init__(self, oracle: Optional[CategorizationOracle] = None):
        self.oracle = oracle or NullOracle()

    async def generate(
        self,
        adapter: BaseAdapter,
        pairings: List[ProjectPairing],
        profiles: List[UserProfile],
        projects: List[Project],
        today: date,
    ) -> Tuple[List[SearchConfiguration], List[StrategyInsight]]:
        """Generate configurations for a provider.

        Args:
            adapter: provider adapter (endpoint, page-size param and max, recency window)
            pairings: (project, owning profile) pairs sent to the oracle, in order
            profiles: every profile, used by the rule-based tier
            projects: every project, used by the rule-based tier
            today: reference date for recency windows

        Returns:
            (configurations, per-project AI insights)
        """
        plan = PLANS[adapter.source_name]
        configs: List[SearchConfiguration] = []
        insights: List[StrategyInsight] = []

        # Tier 1: AI-assisted
        for pairing in pairings:
            categories = await self._classify(plan, pairing)
            if categories is None:
                continue
            insights.append(
                StrategyInsight(
                    project_id=pairing.project.id,
                    project_name=pairing.project.name,
                    categories=categories.as_dict(),
                )
            )
            for family in plan.ai_families:
                for value in family.take(categories.values(family.family)):
                    configs.append(self._build(adapter, family, value, today, pairing.project))
            if plan.ai_extras is not None:
                for family, value in plan.ai_extras(pairing, categories):
                    configs.append(self._build(adapter, family, value, today, pairing.project))

        logger.info(f"{adapter.source_name}: AI strategies generated: {len(insights)} ({len(configs)} configurations)")

        # Tier 2: rule-based
        if not insights or len(configs) < MIN_AI_CONFIGURATIONS:
            buckets = merge_rule_buckets(plan.rule_buckets, profiles, projects)
            before = len(configs)
            for family in plan.rule_families:
                for value in family.take(buckets.get(family.family)):
                    configs.append(self._build(adapter, family, value, today))
            logger.info(f"{adapter.source_name}: added {len(configs) - before} rule-based configurations")

        # Tier 3: emergency
        if not configs:
            logger.warning(f"{adapter.source_name}: no strategies available, using emergency broad search")
            configs.append(self._emergency(adapter, plan, today))

        return configs, insights

    async def _classify(self, plan: ProviderPlan, pairing: ProjectPairing) -> Optional[Categories]:
        prompt = get_prompt_for_kind(plan.oracle_kind, pairing.project, pairing.profile)
        try:
            return await self.oracle.classify(plan.oracle_kind, prompt, pairing.project, pairing.profile)
        except Exception as e:
            logger.warning(f"Categorization failed for project {pairing.project.id}, skipping: {e}")
            return None

    @staticmethod
    def _page_params(adapter: BaseAdapter, page_size: int) -> dict:
        return {adapter.page_size_param: min(page_size, adapter.max_page_size)}

    def _build(
        self,
        adapter: BaseAdapter,
        family: QueryFamily,
        value: str,
        today: date,
        project: Optional[Project] = None,
    ) -> SearchConfiguration:
        name = f"{family.label}: {value}"
        if project is not None:
            name = f"{name} for {project.name}"
        params = {
            **adapter.default_params(today),
            **family.to_params(value),
            **self._page_params(adapter, family.page_size),
        }
        return SearchConfiguration(
            name=name,
            provider_endpoint=adapter.endpoint,
            params=params,
            origin=StrategyOrigin(
                strategy_kind=family.kind,
                related_project_id=project.id if project is not None else None,
                target_category=value,
            ),
        )

    def _emergency(self, adapter: BaseAdapter, plan: ProviderPlan, today: date) -> SearchConfiguration:
        return SearchConfiguration(
            name=plan.emergency_name,
            provider_endpoint=adapter.endpoint,
            params={**adapter.default_params(today), **self._page_params(adapter, EMERGENCY_PAGE_SIZE)},
            origin=StrategyOrigin(strategy_kind=EMERGENCY_KIND),
        )
