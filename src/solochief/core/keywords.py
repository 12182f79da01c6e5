"""Keyword tables used by the triage engine.

Plain data so the tables can be tested and extended without touching the
rules that read them. Bump KEYWORD_TABLE_VERSION when any table changes.
"""

KEYWORD_TABLE_VERSION = 1

# Heuristic layer
URGENCY_KEYWORDS = ("asap", "emergency", "urgent", "broken", "down", "critical")
CRITICAL_TAGS = frozenset({"client", "revenue", "money", "critical"})
DISTRACTION_KEYWORDS = ("scroll", "check social", "browse", "news", "entertainment")
ACTION_VERBS = (
    "write",
    "create",
    "build",
    "fix",
    "update",
    "send",
    "review",
    "analyze",
    "design",
    "implement",
    "call",
    "meet",
)

# Scoring
LEVERAGE_KEYWORDS = (
    "build",
    "ship",
    "launch",
    "create",
    "develop",
    "implement",
    "customer",
    "user",
    "product",
)
REVENUE_TAGS = frozenset({"client", "revenue", "sales", "deal", "contract"})
LEARNING_TAGS = frozenset({"learn", "study", "research", "read"})
HIGH_ENERGY_KEYWORDS = ("create", "design", "build", "solve", "analyze", "strategy")
LOW_ENERGY_KEYWORDS = ("email", "review", "check", "update", "organize")

RECURRING_TAG = "recurring"


def contains_any(text: str, keywords) -> bool:
    """Case-insensitive substring match against any keyword."""
    lowered = text.lower()
    return any(kw in lowered for kw in keywords)


def has_tag_in(tags: list[str], table) -> bool:
    """True if any tag (lower-cased) is in the table."""
    return any(tag.lower() in table for tag in tags)
