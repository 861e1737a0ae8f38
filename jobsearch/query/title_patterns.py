"""Search phrase patterns for query building and provider fallbacks.

Hand-authored lookup data. Keep entries lowercase; lookups are
case-insensitive.
"""

# Skill -> job title phrase. The first skill (in request order) found here wins.
SKILL_TO_TITLE = {
    "java": "software engineer",
    "python": "backend developer",
    "javascript": "full stack developer",
    "typescript": "full stack developer",
    "react": "frontend developer",
    "node": "backend developer",
    "nodejs": "backend developer",
    "node.js": "backend developer",
    "angular": "frontend developer",
    "vue": "frontend developer",
    "sql": "database developer",
    "mongodb": "backend developer",
    "postgresql": "backend developer",
    "aws": "cloud engineer",
    "docker": "devops engineer",
    "kubernetes": "devops engineer",
    "git": "software developer",
}

# Title used when no skill matches the table
DEFAULT_TITLE = "software engineer"

# Phrase used when neither skills nor a query are given
DEFAULT_QUERY = "software engineer"

# Generic queries retried, in order, when a provider returns nothing
FALLBACK_QUERIES = (
    "software engineer",
    "software developer",
    "junior developer",
    "backend developer",
    "full stack developer",
    "intern software developer",
)

# Deterministic enhancement used when the text-generation call is unavailable
DEFAULT_LOCATIONS = ("remote", "USA")
DEFAULT_SENIORITY = ("junior", "mid-level")
MAX_FALLBACK_KEYWORDS = 5
