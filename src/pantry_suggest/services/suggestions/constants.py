"""Constants for the quick suggestions engine.

Contains:
- Pantry prioritization weights
- Scoring weights and thresholds
- Fallback limits
"""

from __future__ import annotations

from typing import Final


# =============================================================================
# Pantry Prioritization
# =============================================================================

BASE_PRIORITY: Final[int] = 50
EXPIRING_BONUS: Final[int] = 40
EXPIRING_WITHIN_DAYS: Final[int] = 3
SOON_EXPIRING_BONUS: Final[int] = 20
SOON_EXPIRING_WITHIN_DAYS: Final[int] = 7
ABUNDANT_BONUS: Final[int] = 15
ABUNDANT_QUANTITY: Final[float] = 2.0
PROTEIN_BONUS: Final[int] = 25
RECENT_PURCHASE_BONUS: Final[int] = 10
RECENT_PURCHASE_WITHIN_DAYS: Final[int] = 2
UNDERUSED_BONUS: Final[int] = 10
UNDERUSED_BELOW: Final[int] = 2


# =============================================================================
# Scoring
# =============================================================================

MATCH_WEIGHT: Final[int] = 10
EXPIRING_MATCH_WEIGHT: Final[int] = 20
MISSING_PENALTY: Final[int] = 15
MIN_PANTRY_MATCHES: Final[int] = 3
MAX_MISSING_INGREDIENTS: Final[int] = 2
MAX_RESULTS: Final[int] = 4

COMMON_STAPLES: Final[tuple[str, ...]] = (
    "salt",
    "pepper",
    "oil",
    "water",
    "flour",
    "butter",
    "garlic",
    "onion",
)


# =============================================================================
# Generation and Fallback
# =============================================================================

MIN_PANTRY_ITEMS: Final[int] = 3
FALLBACK_PANTRY_SLICE: Final[int] = 8
MAX_TEMPLATE_PANTRY_ITEMS: Final[int] = 6

INSUFFICIENT_PANTRY_MESSAGE: Final[str] = (
    "Need at least 3 pantry items to generate suggestions"
)
PANTRY_UNAVAILABLE_ERROR: Final[str] = "pantry_unavailable"
