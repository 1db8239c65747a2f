"""Categorization prompt templates, one per oracle kind.

Each prompt asks the categorization service to:
1. Read the project and its owning organization profile
2. Return structured JSON whose list fields become search queries

The JSON field names are the category families the strategy plans read.
"""

from ..models import Project, UserProfile

# Grants.gov - funding categories, agencies, keywords
PROJECT_CATEGORIES_PROMPT = """Analyze this project for federal grant opportunities on Grants.gov:

Project: {project_name}
Type: {project_type}
Description: {description}
Organization: {organization_type}
Industry: {industry}

Return JSON with:
{{
  "primary_categories": ["HL", "ED", "ST", "CD", "EN", "AG", "etc"],
  "priority_agencies": ["HHS", "ED", "NSF", "DOE", "USDA", "etc"],
  "search_keywords": ["specific terms for grant search"],
  "reasoning": "explanation"
}}"""


# SAM.gov - contract departments, set-asides, NAICS
CONTRACTS_PROMPT = """Analyze this project for government contract opportunities:

Project: {project_name}
Type: {project_type}
Description: {description}
Organization: {organization_type}
Industry: {industry}
Small Business: {small_business}
Woman Owned: {woman_owned}
Veteran Owned: {veteran_owned}
Minority Owned: {minority_owned}

Return JSON with:
{{
  "contract_types": ["presol", "solicitation", "award"],
  "departments": ["DOD", "HHS", "GSA", "DHS", "DOE", "etc"],
  "naics_codes": ["541511", "541330", "etc"],
  "set_asides": ["SBA", "WOSB", "VOSB", "SDVOSB", "8A", "HubZone"],
  "contract_keywords": ["IT services", "consulting", "construction"],
  "geographic_focus": ["local", "state", "national"],
  "contract_value_range": "micro|small|medium|large",
  "competition_type": "full_open|set_aside|sole_source",
  "reasoning": "explanation"
}}"""


# NIH RePORTER - health research
HEALTH_PROMPT = """Analyze this project for NIH health research opportunities:

Project: {project_name}
Type: {project_type}
Description: {description}
Industry: {industry}
Organization: {organization_type}

Return JSON with:
{{
  "health_keywords": ["medical terms", "disease areas", "health conditions"],
  "research_types": ["basic", "clinical", "translational", "behavioral"],
  "nih_institutes": ["NCI", "NHLBI", "NIMH", "NIDA", "NIAID", "etc"],
  "target_populations": ["pediatric", "adult", "elderly", "women", "minorities"],
  "research_methods": ["clinical trial", "epidemiology", "genomics", "imaging"],
  "funding_mechanisms": ["R01", "R21", "R03", "SBIR", "STTR"],
  "health_focus_area": "cancer|heart|mental_health|infectious_disease|etc",
  "reasoning": "explanation"
}}"""


# NSF Awards - research domains
RESEARCH_PROMPT = """Analyze this project for NSF research grant opportunities:

Project: {project_name}
Type: {project_type}
Description: {description}
Industry: {industry}
Organization: {organization_type}

Return JSON with:
{{
  "research_keywords": ["specific research terms", "scientific domains", "technology areas"],
  "nsf_divisions": ["BIO", "CISE", "ENG", "GEO", "MPS", "SBE", "EDU"],
  "collaboration_keywords": ["university", "research institution", "partnership terms"],
  "award_size_category": "small|medium|large",
  "research_focus": "basic|applied|translational",
  "reasoning": "explanation"
}}"""


# Candid - private, community and corporate foundations
FOUNDATIONS_PROMPT = """Analyze this project for foundation grant opportunities:

Project: {project_name}
Type: {project_type}
Description: {description}
Organization: {organization_type}
Industry: {industry}
Location: {state}, {country}

Return JSON with:
{{
  "subject_areas": ["education", "health", "environment", "arts", "social_services"],
  "populations_served": ["children", "elderly", "minorities", "women", "rural", "urban"],
  "support_types": ["general_support", "program_support", "capacity_building", "research"],
  "funder_types": ["private_foundation", "community_foundation", "corporate_foundation"],
  "geographic_focus": ["local", "state", "regional", "national"],
  "funding_range": "small|medium|large",
  "grant_keywords": ["specific terms for foundation search"],
  "reasoning": "why these categories fit"
}}"""


PROMPTS = {
    "project_categories": PROJECT_CATEGORIES_PROMPT,
    "contracts": CONTRACTS_PROMPT,
    "health": HEALTH_PROMPT,
    "research": RESEARCH_PROMPT,
    "foundations": FOUNDATIONS_PROMPT,
}


def get_prompt_for_kind(kind: str, project: Project, profile: UserProfile) -> str:
    """Get the categorization prompt for an oracle kind.

    Args:
        kind: One of "project_categories", "contracts", "health", "research", "foundations"
        project: Project being categorized
        profile: Profile of the organization that owns the project

    Returns:
        Formatted prompt string

    Raises:
        ValueError: If kind is not a known categorization kind
    """
    if kind not in PROMPTS:
        raise ValueError(f"Invalid categorization kind: {kind}. Must be one of {list(PROMPTS.keys())}")

    return PROMPTS[kind].format(
        project_name=project.name,
        project_type=project.project_type,
        description=project.description,
        organization_type=profile.organization_type,
        industry=profile.industry,
        state=profile.state,
        country=profile.country,
        small_business=profile.small_business,
        woman_owned=profile.woman_owned,
        veteran_owned=profile.veteran_owned,
        minority_owned=profile.minority_owned,
    )
