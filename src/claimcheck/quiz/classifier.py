"""
Feature classifier

Turns one free-text feature into a multiple-choice question using an ordered
list of keyword rules. Rules are checked top to bottom against the lower-cased
feature and the first match wins, so "left strap is black" asks about the side
rather than the color. Anything no rule claims gets the fallback question.
"""

from dataclasses import dataclass
from typing import Optional

from .schema import Question


# Number of choices the fallback pads up to
FALLBACK_CHOICE_COUNT = 4


@dataclass(frozen=True)
class MatchRule:
    """A keyword rule: any keyword present selects this question template."""
    name: str
    keywords: tuple[str, ...]
    text: str
    choices: tuple[str, ...]

    def matches(self, lowered: str) -> bool:
        return any(keyword in lowered for keyword in self.keywords)


# Priority order matters: earlier rules shadow later ones on ambiguous input.
RULES: tuple[MatchRule, ...] = (
    MatchRule(
        name="side",
        keywords=("left", "right"),
        text="Which side is described as different?",
        choices=("Left", "Right", "Both", "Neither"),
    ),
    MatchRule(
        name="color",
        keywords=("black", "blue", "red"),
        text="What is the main color of the item?",
        choices=("Black", "Blue", "Red", "Other"),
    ),
    MatchRule(
        name="damage",
        keywords=("scratch", "crack"),
        text="What kind of damage does the item have?",
        choices=("Scratch", "Crack", "Dent", "No visible damage"),
    ),
)


def question_id(ordinal: int) -> str:
    """Question id for the feature at position `ordinal` (0-based)."""
    return f"q{ordinal + 1}"


class FeatureClassifier:
    """
    Rule-based feature → question classifier.

    Pure and deterministic: the same feature and ordinal always produce the
    same question, and no input string makes it fail.
    """

    def __init__(self, rules: tuple[MatchRule, ...] = RULES):
        self.rules = rules

    def match(self, feature: str) -> Optional[MatchRule]:
        """Return the first rule matching the feature, or None for the fallback."""
        lowered = feature.lower()
        for rule in self.rules:
            if rule.matches(lowered):
                return rule
        return None

    def classify(self, feature: str, ordinal: int) -> Question:
        """
        Classify a feature into a question.

        Args:
            feature: Free-text feature, e.g. "Color: matte black"
            ordinal: Position of the feature in the input (0-based)

        Returns:
            Question whose first choice ('a') is the correct one
        """
        rule = self.match(feature)
        if rule is not None:
            return Question.build(question_id(ordinal), rule.text, list(rule.choices))
        return self._fallback(feature, ordinal)

    def _fallback(self, feature: str, ordinal: int) -> Question:
        choices = [feature]
        while len(choices) < FALLBACK_CHOICE_COUNT:
            choices.append(f"{feature} (slightly different)")

        return Question.build(
            question_id(ordinal),
            f"Which detail best matches this item? ({feature})",
            choices,
        )


_default_classifier = FeatureClassifier()


def classify(feature: str, ordinal: int) -> Question:
    """Classify with the default rule set."""
    return _default_classifier.classify(feature, ordinal)
