"""Protected functional areas of the tracker."""

import enum


class Module(str, enum.Enum):
    """Closed set of modules; values double as URL slugs."""

    DASHBOARD = "dashboard"
    ONBOARDING = "onboarding"
    ENTITIES = "entities"
    THOUGHTS = "thoughts"
    CONCEPT_ART = "concept-art"
    LORE = "lore"
