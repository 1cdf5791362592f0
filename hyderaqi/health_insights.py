"""
Health insights module for the HyderAQI dashboard core.

Defines the HealthInsight and InsightResponse dataclasses returned by the
insight requestor, and the validation that turns a decoded JSON payload
into them. A payload missing any required field is rejected as a whole;
there is no partial result.
"""

from dataclasses import dataclass, field

from .exceptions import SchemaValidationError


SEVERITIES = ("low", "medium", "high")


def _require(payload: dict, key: str, expected_type: type, context: str):
    if not isinstance(payload, dict):
        raise SchemaValidationError(f"{context} must be an object")
    value = payload.get(key)
    if value is None:
        raise SchemaValidationError(f"{context} is missing required field '{key}'")
    if not isinstance(value, expected_type):
        raise SchemaValidationError(
            f"{context}.{key} must be of type {expected_type.__name__}"
        )
    return value


@dataclass
class HealthInsight:
    """
    One health observation for the selected area.

    Attributes:
        title: Short heading
        description: One or two sentences of detail
        icon: Icon key chosen by the model (e.g. "lungs")
        severity: One of "low", "medium", "high"
    """

    title: str
    description: str
    icon: str
    severity: str

    @classmethod
    def from_dict(cls, payload: dict) -> "HealthInsight":
        severity = _require(payload, "severity", str, "insight").strip().lower()
        if severity not in SEVERITIES:
            raise SchemaValidationError(
                f"insight.severity must be one of {', '.join(SEVERITIES)}, got '{severity}'"
            )
        return cls(
            title=_require(payload, "title", str, "insight"),
            description=_require(payload, "description", str, "insight"),
            icon=_require(payload, "icon", str, "insight"),
            severity=severity,
        )


@dataclass
class InsightResponse:
    """
    Structured health analysis for one location.

    Owned by the currently displayed location and replaced wholesale on every
    fetch.

    Attributes:
        summary: Paragraph summarising the air quality situation
        insights: Ordered health insights
        recommendations: Ordered recommendation strings
    """

    summary: str
    insights: list[HealthInsight] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: dict) -> "InsightResponse":
        """
        Builds an InsightResponse from a decoded JSON payload.

        Args:
            payload: Dict with ``summary``, ``insights`` and ``recommendations``

        Returns:
            The validated InsightResponse

        Raises:
            SchemaValidationError: If any required field or nested field is
                missing, null or of the wrong type
        """
        summary = _require(payload, "summary", str, "response")
        raw_insights = _require(payload, "insights", list, "response")
        raw_recommendations = _require(payload, "recommendations", list, "response")

        recommendations = []
        for item in raw_recommendations:
            if not isinstance(item, str):
                raise SchemaValidationError("response.recommendations must contain only strings")
            recommendations.append(item)

        return cls(
            summary=summary,
            insights=[HealthInsight.from_dict(item) for item in raw_insights],
            recommendations=recommendations,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "summary": self.summary,
            "insights": [
                {
                    "title": insight.title,
                    "description": insight.description,
                    "icon": insight.icon,
                    "severity": insight.severity,
                }
                for insight in self.insights
            ],
            "recommendations": list(self.recommendations),
        }
