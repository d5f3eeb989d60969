"""
Feature list helpers

Builds labelled feature strings from the manual-input form fields.
"""

from typing import Optional


MANUAL_FIELDS = (
    ("Color", "color"),
    ("Brand", "brand"),
    ("Marks", "marks"),
    ("Description", "description"),
)


def build_manual_features(
    color: Optional[str] = None,
    brand: Optional[str] = None,
    marks: Optional[str] = None,
    description: Optional[str] = None,
) -> list[str]:
    """
    Turn manual form fields into features, skipping blank ones.

    >>> build_manual_features(color=" matte black ", brand="Nike")
    ['Color: matte black', 'Brand: Nike']
    """
    values = {"color": color, "brand": brand, "marks": marks, "description": description}
    features = []
    for label, key in MANUAL_FIELDS:
        value = (values[key] or "").strip()
        if value:
            features.append(f"{label}: {value}")
    return features
