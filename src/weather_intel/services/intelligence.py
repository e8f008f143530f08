"""Weather intelligence engine.

Turns a current-weather snapshot into a narrative explanation and four
activity suitability scores. Everything here is a pure function of the
snapshot.

Explanation rules are evaluated top to bottom and every matching rule
overwrites the previous match, so the last matching rule wins:

    1. default                      Stable Atmospheric Conditions
    2. temperature > 30 C           High Thermal Activity Detected
    3. temperature < 10 C           Low Thermal Regime Active
    4. humidity > 80 %              High Moisture Content Detected
    5. wind > 30 km/h               Elevated Wind Vector Activity
    6. condition has rain/storm     Active Precipitation System

Score rules (each clamped to [0, 100]):

    running      base 100; -30 temp > 30 or < 5; -20 humidity > 80;
                 -15 wind > 20; -40 rain.              OPTIMAL > 70, CAUTION > 40
    photography  base 60; +20 cloud 20-70; -25 cloud > 80 or UV > 7;
                 -40 rain.                             OPTIMAL > 70, CAUTION > 40
    travel       base 100; -50 visibility < 5; -30 wind > 40;
                 -50 storm/heavy.                      OPTIMAL > 70, CAUTION > 30
    aviation     base 100; -30 wind > 25; -30 cloud > 80;
                 -80 visibility < 3.                   OPTIMAL > 80, CAUTION > 50
"""

from collections.abc import Callable
from dataclasses import dataclass

from weather_intel.entities import (
    DecisionInsight,
    InsightStatus,
    MeteorologicalExplanation,
    WeatherIntelligence,
    WeatherSnapshot,
)


def _condition_has(snapshot: WeatherSnapshot, *words: str) -> bool:
    text = snapshot.condition.lower()
    return any(word in text for word in words)


@dataclass(frozen=True)
class ExplanationRule:
    matches: Callable[[WeatherSnapshot], bool]
    explanation: MeteorologicalExplanation


DEFAULT_EXPLANATION = MeteorologicalExplanation(
    headline="Stable Atmospheric Conditions",
    reasoning="The local atmosphere is currently exhibiting high stability with balanced pressure systems.",
    cause="Normal surface heating and low pressure gradient.",
    effect="Ideal conditions for general mobility and outdoor exposure.",
)

# Order matters: later matches override earlier ones.
EXPLANATION_RULES: tuple[ExplanationRule, ...] = (
    ExplanationRule(
        matches=lambda s: s.temperature_c > 30,
        explanation=MeteorologicalExplanation(
            headline="High Thermal Activity Detected",
            reasoning="High solar intensity combined with stagnant air is creating a localized thermal dome.",
            cause="Direct solar exposure and low convective cooling.",
            effect="Elevated heat stress and rapid fluid loss.",
        ),
    ),
    ExplanationRule(
        matches=lambda s: s.temperature_c < 10,
        explanation=MeteorologicalExplanation(
            headline="Low Thermal Regime Active",
            reasoning="A cold air mass is limiting surface heating and keeping near-ground temperatures low.",
            cause="Weak solar input and advection of cooler air.",
            effect="Increased risk of cold stress and slower physical recovery.",
        ),
    ),
    ExplanationRule(
        matches=lambda s: s.humidity > 80,
        explanation=MeteorologicalExplanation(
            headline="High Moisture Content Detected",
            reasoning="The air is close to saturation, reducing evaporative cooling and favouring condensation.",
            cause="Moist air advection and limited vertical mixing.",
            effect="Muggy conditions, possible fog and reduced perceived comfort.",
        ),
    ),
    ExplanationRule(
        matches=lambda s: s.wind_kph > 30,
        explanation=MeteorologicalExplanation(
            headline="Elevated Wind Vector Activity",
            reasoning="The atmosphere is rapidly equalizing between high and low pressure zones, creating significant airflow.",
            cause="Steep pressure change over a short horizontal distance.",
            effect="Increased wind chill and potential for debris transport.",
        ),
    ),
    ExplanationRule(
        matches=lambda s: _condition_has(s, "rain", "storm"),
        explanation=MeteorologicalExplanation(
            headline="Active Precipitation System",
            reasoning="A moisture-heavy air mass has reached the dew point, causing condensation and gravity-driven precipitation.",
            cause="Significant humidity coupled with local cooling.",
            effect="Reduced visibility and surface friction.",
        ),
    ),
)


def explain(snapshot: WeatherSnapshot) -> MeteorologicalExplanation:
    """Pick the narrative explanation for a snapshot.

    Args:
        snapshot: Current conditions

    Returns:
        The explanation of the last matching rule, or the stable default
    """
    explanation = DEFAULT_EXPLANATION
    for rule in EXPLANATION_RULES:
        if rule.matches(snapshot):
            explanation = rule.explanation
    return explanation


@dataclass(frozen=True)
class ActivityProfile:
    """Label, status thresholds and advice for one activity."""

    label: str
    optimal_above: int
    caution_above: int
    advice: dict[InsightStatus, str]

    def insight(self, raw_score: float) -> DecisionInsight:
        score = int(max(0, min(100, raw_score)))
        if score > self.optimal_above:
            status = InsightStatus.OPTIMAL
        elif score > self.caution_above:
            status = InsightStatus.CAUTION
        else:
            status = InsightStatus.DANGER
        return DecisionInsight(label=self.label, score=score, status=status, advice=self.advice[status])


RUNNING = ActivityProfile(
    label="Endurance Score",
    optimal_above=70,
    caution_above=40,
    advice={
        InsightStatus.OPTIMAL: "Perfect for high-intensity training.",
        InsightStatus.CAUTION: "Hydrate aggressively and reduce pace.",
        InsightStatus.DANGER: "Move the session indoors or postpone it.",
    },
)

PHOTOGRAPHY = ActivityProfile(
    label="Diffusion Index",
    optimal_above=70,
    caution_above=40,
    advice={
        InsightStatus.OPTIMAL: "Excellent soft light and dramatic sky textures.",
        InsightStatus.CAUTION: "Harsh contrast expected. Use ND filters.",
        InsightStatus.DANGER: "Flat or wet conditions. Protect your gear.",
    },
)

TRAVEL = ActivityProfile(
    label="Mobility Safety",
    optimal_above=70,
    caution_above=30,
    advice={
        InsightStatus.OPTIMAL: "Nominal road and rail conditions.",
        InsightStatus.CAUTION: "Significant delays and visibility hazards reported.",
        InsightStatus.DANGER: "Avoid non-essential travel.",
    },
)

AVIATION = ActivityProfile(
    label="Flight Clearances",
    optimal_above=80,
    caution_above=50,
    advice={
        InsightStatus.OPTIMAL: "VFR conditions sustained.",
        InsightStatus.CAUTION: "IFR protocols likely. High turbulence probability.",
        InsightStatus.DANGER: "Below minimums. Expect ground holds and diversions.",
    },
)


def score_running(snapshot: WeatherSnapshot) -> DecisionInsight:
    score = 100
    if snapshot.temperature_c > 30 or snapshot.temperature_c < 5:
        score -= 30
    if snapshot.humidity > 80:
        score -= 20
    if snapshot.wind_kph > 20:
        score -= 15
    if _condition_has(snapshot, "rain"):
        score -= 40
    return RUNNING.insight(score)


def score_photography(snapshot: WeatherSnapshot) -> DecisionInsight:
    score = 60
    # partial cloud diffuses light
    if 20 <= snapshot.cloud <= 70:
        score += 20
    if snapshot.cloud > 80 or snapshot.uv > 7:
        score -= 25
    if _condition_has(snapshot, "rain"):
        score -= 40
    return PHOTOGRAPHY.insight(score)


def score_travel(snapshot: WeatherSnapshot) -> DecisionInsight:
    score = 100
    if snapshot.visibility_km < 5:
        score -= 50
    if snapshot.wind_kph > 40:
        score -= 30
    if _condition_has(snapshot, "storm", "heavy"):
        score -= 50
    return TRAVEL.insight(score)


def score_aviation(snapshot: WeatherSnapshot) -> DecisionInsight:
    score = 100
    if snapshot.wind_kph > 25:
        score -= 30
    if snapshot.cloud > 80:
        score -= 30
    if snapshot.visibility_km < 3:
        score -= 80
    return AVIATION.insight(score)


def build_intelligence(snapshot: WeatherSnapshot) -> WeatherIntelligence:
    """Compute the explanation and all four insights for a snapshot."""
    return WeatherIntelligence(
        explanation=explain(snapshot),
        running=score_running(snapshot),
        photography=score_photography(snapshot),
        travel=score_travel(snapshot),
        aviation=score_aviation(snapshot),
    )
