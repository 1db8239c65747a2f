"""Constant lookup tables for rule-based search strategies.

Keys are profile/project attribute values (lowercase); values are the
search terms each attribute contributes to a bucket.
"""

# ----------------------------------------------------------------------
# Grants.gov - funding category codes, agency codes, keywords
# ----------------------------------------------------------------------

GRANTS_ORG_TYPES = {
    "nonprofit": {
        "categories": ["HL", "ED", "HU"],
        "agencies": ["HHS", "ED"],
        "keywords": ["community development", "social services"],
    },
    "for_profit": {
        "categories": ["ST", "EN"],
        "agencies": ["DOE", "NSF"],
        "keywords": ["innovation", "research"],
    },
    "government": {
        "categories": ["CD", "HL"],
        "agencies": ["HUD", "EPA"],
        "keywords": ["infrastructure", "public services"],
    },
}

GRANTS_INDUSTRIES = {
    "healthcare": {"categories": ["HL"], "agencies": ["HHS", "CDC"], "keywords": ["health", "medical"]},
    "education": {"categories": ["ED"], "agencies": ["ED"], "keywords": ["education", "training"]},
    "technology": {"categories": ["ST"], "agencies": ["NSF", "DOD"], "keywords": ["technology", "innovation"]},
    "environment": {"categories": ["EN", "AG"], "agencies": ["EPA", "USDA"], "keywords": ["environment", "sustainability"]},
    "construction": {"categories": ["CD"], "agencies": ["HUD"], "keywords": ["construction", "infrastructure"]},
    "agriculture": {"categories": ["AG"], "agencies": ["USDA"], "keywords": ["agriculture", "farming"]},
}

GRANTS_PROJECT_TYPES = {
    "community_development": {"categories": ["CD", "HL"], "keywords": ["community", "development", "revitalization"]},
    "infrastructure": {"categories": ["CD", "EN", "T"], "keywords": ["infrastructure", "transportation", "utilities"]},
    "healthcare": {"categories": ["HL"], "keywords": ["health", "medical", "clinic"]},
    "education": {"categories": ["ED"], "keywords": ["education", "training", "workforce"]},
    "environmental": {"categories": ["EN", "AG"], "keywords": ["environment", "energy", "sustainability"]},
    "research": {"categories": ["ST", "HL"], "keywords": ["research", "innovation", "development"]},
    "nonprofit_program": {"categories": ["CD", "HL"], "keywords": ["nonprofit", "services", "program"]},
    "small_business": {"categories": ["BC"], "keywords": ["small business", "entrepreneur", "commercial"]},
    "commercial_development": {"categories": ["BC", "RD"], "keywords": ["commercial", "business", "economic"]},
    "residential_development": {"categories": ["HO", "CD"], "keywords": ["housing", "residential", "affordable"]},
    "agriculture": {"categories": ["AG"], "keywords": ["agriculture", "farming", "rural"]},
    "technology": {"categories": ["ST"], "keywords": ["technology", "innovation", "digital"]},
}

GRANTS_CERTIFICATIONS = {
    "small_business": {"agencies": ["SBA"], "keywords": ["small business"]},
    "minority_owned": {"agencies": ["MBDA"], "keywords": ["minority", "disadvantaged"]},
    "woman_owned": {"keywords": ["women"]},
    "veteran_owned": {"keywords": ["veteran"]},
}

GRANTS_DEFAULTS = {"categories": ["HL", "CD"]}

# ----------------------------------------------------------------------
# SAM.gov - departments, set-asides, title keywords
# ----------------------------------------------------------------------

# Common department abbreviations -> organizationName accepted by SAM.gov
DEPARTMENT_MAPPINGS = {
    "DOD": "DEPARTMENT OF DEFENSE",
    "HHS": "DEPARTMENT OF HEALTH AND HUMAN SERVICES",
    "GSA": "GENERAL SERVICES ADMINISTRATION",
    "DHS": "DEPARTMENT OF HOMELAND SECURITY",
    "DOE": "DEPARTMENT OF ENERGY",
    "DOT": "DEPARTMENT OF TRANSPORTATION",
    "VA": "DEPARTMENT OF VETERANS AFFAIRS",
    "DOJ": "DEPARTMENT OF JUSTICE",
    "USDA": "DEPARTMENT OF AGRICULTURE",
    "DOL": "DEPARTMENT OF LABOR",
    "ED": "DEPARTMENT OF EDUCATION",
    "HUD": "DEPARTMENT OF HOUSING AND URBAN DEVELOPMENT",
    "DOI": "DEPARTMENT OF THE INTERIOR",
    "STATE": "DEPARTMENT OF STATE",
    "TREASURY": "DEPARTMENT OF THE TREASURY",
    "DOC": "DEPARTMENT OF COMMERCE",
}

# Set-aside names -> typeOfSetAside codes
VALID_SET_ASIDES = {
    "SBA": "SBA",  # Total Small Business
    "WOSB": "WOSB",  # Women-Owned Small Business
    "VOSB": "VSA",  # Veteran-Owned Small Business (VA)
    "SDVOSB": "SDVOSBC",  # Service-Disabled Veteran-Owned
    "8A": "8A",
    "HubZone": "HZC",
    "EDWOSB": "EDWOSB",  # Economically Disadvantaged WOSB
}

CONTRACT_ORG_TYPES = {
    "for_profit": {"keywords": ["professional services", "consulting", "technical services"]},
    "nonprofit": {"departments": ["HHS"], "keywords": ["social services", "training", "program management"]},
}

CONTRACT_CERTIFICATIONS = {
    "small_business": {"set_asides": ["SBA"]},
    "woman_owned": {"set_asides": ["WOSB"]},
    "veteran_owned": {"set_asides": ["VOSB", "SDVOSB"]},
    "minority_owned": {"set_asides": ["8A"]},
}

CONTRACT_INDUSTRIES = {
    "technology": {
        "departments": ["DOD", "DHS", "GSA"],
        "naics_codes": ["541511", "541512", "541513"],
        "keywords": ["IT services", "software development", "cybersecurity"],
    },
    "healthcare": {
        "departments": ["HHS", "VA"],
        "naics_codes": ["621111", "621399"],
        "keywords": ["medical services", "healthcare consulting", "clinical research"],
    },
    "construction": {
        "departments": ["GSA", "DOD", "DOT"],
        "naics_codes": ["236220", "237310"],
        "keywords": ["construction", "renovation", "infrastructure"],
    },
    "consulting": {
        "departments": ["DOD", "DHS", "DOE"],
        "naics_codes": ["541611", "541618"],
        "keywords": ["management consulting", "strategic planning", "analysis"],
    },
    "education": {
        "departments": ["ED", "DOD"],
        "naics_codes": ["611710", "541612"],
        "keywords": ["training", "education services", "curriculum development"],
    },
    "engineering": {
        "departments": ["DOD", "DOT", "DOE"],
        "naics_codes": ["541330", "541380"],
        "keywords": ["engineering", "technical services", "design"],
    },
}

CONTRACT_PROJECT_TYPES = {
    "infrastructure": {"departments": ["DOT", "GSA"], "keywords": ["infrastructure", "construction", "maintenance"]},
    "technology": {"departments": ["DHS", "DOD"], "keywords": ["technology", "IT services", "software"]},
    "research": {"departments": ["DOD", "DOE", "HHS"], "keywords": ["research", "development", "analysis"]},
    "consulting": {"departments": ["DOD", "DHS"], "keywords": ["consulting", "advisory", "strategic planning"]},
}

CONTRACT_DEFAULTS = {
    "departments": ["DOD", "GSA", "HHS"],
    "keywords": ["professional services", "consulting"],
}

# ----------------------------------------------------------------------
# NIH RePORTER - health keywords, institutes
# ----------------------------------------------------------------------

HEALTH_ORG_TYPES = {
    "healthcare": {"keywords": ["health", "medical", "clinical", "patient care", "public health"]},
    "nonprofit": {"keywords": ["health", "medical", "clinical", "patient care", "public health"]},
    "university": {"keywords": ["research", "biomedical", "clinical trial", "basic science"]},
    "for_profit": {
        "keywords": ["drug development", "medical device", "biotechnology", "pharmaceutical", "SBIR", "STTR"],
    },
}

HEALTH_INDUSTRIES = {
    "healthcare": {
        "keywords": ["healthcare delivery", "patient outcomes", "quality improvement"],
        "institutes": ["AHRQ", "NLM"],
    },
    "biotechnology": {
        "keywords": ["genomics", "proteomics", "personalized medicine", "biomarkers"],
        "institutes": ["NHGRI", "NCI", "NIMH"],
    },
    "pharmaceuticals": {
        "keywords": ["drug discovery", "therapeutics", "clinical trials"],
        "institutes": ["NCI", "NHLBI", "NIMH", "NIDA"],
    },
    "medical_devices": {
        "keywords": ["medical technology", "diagnostics", "imaging"],
        "institutes": ["NIBIB", "NHLBI"],
    },
    "mental_health": {
        "keywords": ["mental health", "behavioral health", "psychology"],
        "institutes": ["NIMH", "NIDA", "NIAAA"],
    },
    "aging": {
        "keywords": ["aging", "geriatrics", "alzheimer", "dementia"],
        "institutes": ["NIA"],
    },
}

HEALTH_DESCRIPTION_TERMS = [
    "cancer", "diabetes", "heart disease", "mental health", "alzheimer",
    "covid", "vaccine", "treatment", "therapy", "clinical",
    "biomedical", "genomics", "precision medicine", "AI in healthcare",
]

HEALTH_PROJECT_TYPES = {
    "healthcare": {"keywords": ["health services", "patient care"]},
    "medical_research": {"keywords": ["biomedical research", "clinical research"]},
    "mental_health": {"keywords": ["mental health", "behavioral intervention"]},
    "public_health": {"keywords": ["public health", "epidemiology", "prevention"]},
}

HEALTH_DEFAULTS = {
    "keywords": ["health", "biomedical", "research"],
    "institutes": ["NCI", "NHLBI", "NIMH"],
}

# ----------------------------------------------------------------------
# NSF Awards - research keywords, awardee states
# ----------------------------------------------------------------------

RESEARCH_ORG_TYPES = {
    "university": {"keywords": ["education", "research", "development", "training"]},
    "nonprofit": {"keywords": ["education", "research", "development", "training"]},
    "for_profit": {"keywords": ["innovation", "technology", "commercialization", "SBIR", "STTR"]},
}

RESEARCH_INDUSTRIES = {
    "healthcare": {"keywords": ["biomedical", "health", "medical", "biotechnology"]},
    "technology": {"keywords": ["computer science", "artificial intelligence", "cybersecurity", "software"]},
    "environment": {"keywords": ["environmental", "climate", "sustainability", "renewable energy"]},
    "engineering": {"keywords": ["engineering", "materials", "mechanical", "civil"]},
    "education": {"keywords": ["education", "STEM", "learning", "workforce"]},
    "agriculture": {"keywords": ["agriculture", "food systems", "agricultural engineering"]},
    "energy": {"keywords": ["energy", "renewable", "solar", "wind", "battery"]},
}

RESEARCH_DESCRIPTION_TERMS = [
    "AI", "machine learning", "data science", "biotechnology",
    "nanotechnology", "robotics", "cybersecurity", "blockchain",
    "quantum", "materials", "environmental", "renewable",
]

RESEARCH_DEFAULTS = {"keywords": ["research", "innovation", "development"]}

# ----------------------------------------------------------------------
# Candid - foundation subjects, populations, support and funder types
# ----------------------------------------------------------------------

FOUNDATION_ORG_TYPES = {
    "nonprofit": {
        "subjects": ["social_services", "community_development", "health"],
        "support_types": ["general_support", "program_support"],
        "funder_types": ["private_foundation", "community_foundation"],
    },
    "university": {
        "subjects": ["education", "research", "scholarship"],
        "support_types": ["program_support", "research"],
        "funder_types": ["private_foundation"],
    },
    "arts": {
        "subjects": ["arts_culture", "humanities"],
        "support_types": ["program_support", "capacity_building"],
        "funder_types": ["private_foundation"],
    },
}

FOUNDATION_INDUSTRIES = {
    "healthcare": {"subjects": ["health", "medical_research", "public_health"], "populations": ["patients", "underserved"]},
    "education": {"subjects": ["education", "workforce_development", "scholarship"], "populations": ["students", "children", "youth"]},
    "environment": {"subjects": ["environment", "conservation", "sustainability"], "populations": ["communities", "rural"]},
    "social_services": {
        "subjects": ["social_services", "human_services", "community_development"],
        "populations": ["low_income", "minorities", "families"],
    },
    "arts": {"subjects": ["arts_culture", "humanities", "creative"], "populations": ["artists", "youth", "communities"]},
}

FOUNDATION_PROJECT_TYPES = {
    "community_development": {
        "subjects": ["community_development", "housing", "economic_development"],
        "populations": ["low_income", "minorities", "communities"],
    },
    "education": {"subjects": ["education", "workforce_development", "literacy"], "populations": ["children", "youth", "students"]},
    "healthcare": {"subjects": ["health", "medical_research", "mental_health"], "populations": ["patients", "elderly", "underserved"]},
    "environmental": {"subjects": ["environment", "conservation", "renewable_energy"], "populations": ["communities", "rural"]},
    "research": {"subjects": ["research", "innovation", "technology"], "support_types": ["research", "program_support"]},
}

FOUNDATION_CERTIFICATIONS = {
    "minority_owned": {"populations": ["minorities"]},
    "woman_owned": {"populations": ["women"]},
    "veteran_owned": {"populations": ["veterans"]},
}

FOUNDATION_DEFAULTS = {
    "subjects": ["community_development", "education", "health"],
    "support_types": ["general_support", "program_support"],
    "funder_types": ["private_foundation", "community_foundation"],
}
