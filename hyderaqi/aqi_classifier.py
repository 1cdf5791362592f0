"""
AQI classifier module for the HyderAQI dashboard core.

This module maps an Air Quality Index value to one of six severity tiers
(Good through Hazardous) together with the display label and the
presentation tokens a rendering layer uses to colour cards and gradients.
The classifier is a pure function: it holds no state and performs no I/O.
"""

from dataclasses import dataclass
from enum import Enum


class AqiTier(Enum):
    """
    Ordered severity tiers of the US EPA AQI scale.

    The enum value is the human-readable label. ``severity`` gives the rank
    (0 = Good, 5 = Hazardous) for ordering comparisons.
    """

    GOOD = "Good"
    MODERATE = "Moderate"
    UNHEALTHY_FOR_SENSITIVE_GROUPS = "Unhealthy for Sensitive Groups"
    UNHEALTHY = "Unhealthy"
    VERY_UNHEALTHY = "Very Unhealthy"
    HAZARDOUS = "Hazardous"

    @property
    def severity(self) -> int:
        return _TIER_ORDER.index(self)

    @property
    def label(self) -> str:
        return self.value


_TIER_ORDER = list(AqiTier)

# Inclusive upper bounds, ascending. Anything above the last bound is Hazardous.
TIER_UPPER_BOUNDS = (
    (50, AqiTier.GOOD),
    (100, AqiTier.MODERATE),
    (150, AqiTier.UNHEALTHY_FOR_SENSITIVE_GROUPS),
    (200, AqiTier.UNHEALTHY),
    (300, AqiTier.VERY_UNHEALTHY),
)

# Background gradient keys used by the dashboard cards
GRADIENT_TOKENS = {
    AqiTier.GOOD: "aqi-gradient-good",
    AqiTier.MODERATE: "aqi-gradient-moderate",
    AqiTier.UNHEALTHY_FOR_SENSITIVE_GROUPS: "aqi-gradient-unhealthy-sensitive",
    AqiTier.UNHEALTHY: "aqi-gradient-unhealthy",
    AqiTier.VERY_UNHEALTHY: "aqi-gradient-very-unhealthy",
    AqiTier.HAZARDOUS: "aqi-gradient-hazardous",
}

# Text colour keys used for the AQI figure and pollutant values
COLOR_TOKENS = {
    AqiTier.GOOD: "text-green-400",
    AqiTier.MODERATE: "text-yellow-400",
    AqiTier.UNHEALTHY_FOR_SENSITIVE_GROUPS: "text-orange-400",
    AqiTier.UNHEALTHY: "text-red-400",
    AqiTier.VERY_UNHEALTHY: "text-purple-400",
    AqiTier.HAZARDOUS: "text-red-900",
}


@dataclass(frozen=True)
class AqiClassification:
    """
    Result of classifying a single AQI value.

    Attributes:
        tier: The severity tier the value falls into
        label: Display label of the tier (e.g. "Moderate")
        presentation_token: Gradient key for the tier's background
        color_token: Text colour key for the tier
    """

    tier: AqiTier
    label: str
    presentation_token: str
    color_token: str


def tier_for(aqi: float) -> AqiTier:
    """
    Returns the severity tier for an AQI value.

    Walks the ascending bounds and returns the first tier whose inclusive
    upper bound the value satisfies, so 50 is Good and 51 is Moderate.
    Negative and fractional values follow the same inequality chain and are
    never rejected. Values that satisfy no bound (including NaN) are Hazardous.

    Args:
        aqi: Air Quality Index value

    Returns:
        The matching AqiTier
    """
    for upper_bound, tier in TIER_UPPER_BOUNDS:
        if aqi <= upper_bound:
            return tier
    return AqiTier.HAZARDOUS


def classify(aqi: float) -> AqiClassification:
    """
    Classifies an AQI value into tier, label and presentation tokens.

    Args:
        aqi: Air Quality Index value

    Returns:
        AqiClassification for the value. Tokens depend only on the tier.
    """
    tier = tier_for(aqi)
    return AqiClassification(
        tier=tier,
        label=tier.label,
        presentation_token=GRADIENT_TOKENS[tier],
        color_token=COLOR_TOKENS[tier],
    )


def status_label(aqi: float) -> str:
    """Shorthand for ``classify(aqi).label``."""
    return tier_for(aqi).label
