"""
Activity catalog module for the Activity Risk engine.

This module contains the ActivityCatalog class, an immutable registry of
ActivityTemplate objects, and the built-in templates the application ships
with. A catalog is passed into the DecisionEngine explicitly so tests and
callers can substitute their own activity sets.
"""

from typing import Iterable, Iterator, Optional

from .activity_template import ActivityTemplate


DEFAULT_ACTIVITY_TEMPLATES: tuple[ActivityTemplate, ...] = (
    ActivityTemplate(
        id="jogging",
        name="晨跑",
        icon="🏃",
        description="30 分鐘慢跑",
        base_risk_factor=0.7,  # High exertion, large breathing volume
        duration=30,
        intensity="high",
    ),
    ActivityTemplate(
        id="walking",
        name="散步",
        icon="🚶",
        description="1 小時戶外散步",
        base_risk_factor=0.3,
        duration=60,
        intensity="low",
    ),
    ActivityTemplate(
        id="cycling",
        name="騎車通勤",
        icon="🚴",
        description="20 分鐘自行車通勤",
        base_risk_factor=0.5,
        duration=20,
        intensity="medium",
    ),
    ActivityTemplate(
        id="outdoor_dining",
        name="戶外用餐",
        icon="🍽️",
        description="1 小時戶外餐廳",
        base_risk_factor=0.2,  # Sedentary
        duration=60,
        intensity="low",
    ),
    ActivityTemplate(
        id="playground",
        name="兒童遊樂",
        icon="🎪",
        description="孩子在戶外遊樂場",
        base_risk_factor=0.6,  # Children are more sensitive
        duration=45,
        intensity="medium",
    ),
)


class ActivityCatalog:
    """
    Immutable, ordered registry of activity templates.

    Enforces that every template is valid and that template ids are unique.
    Iteration order is the order in which templates were supplied, which is
    also the order the batch evaluator reports decisions in.
    """

    def __init__(self, templates: Iterable[ActivityTemplate] = DEFAULT_ACTIVITY_TEMPLATES):
        """
        Initialize the catalog.

        Args:
            templates: Activity templates to register, in display order

        Raises:
            ValueError: If a template is invalid or an id appears twice
        """
        ordered = tuple(templates)
        seen: set[str] = set()
        for template in ordered:
            valid, reason = template.validate()
            if not valid:
                raise ValueError(f"Invalid activity template '{template.id}': {reason}")
            if template.id in seen:
                raise ValueError(f"Duplicate activity id '{template.id}'")
            seen.add(template.id)

        self._templates = ordered
        self._by_id = {template.id: template for template in ordered}

    @property
    def templates(self) -> tuple[ActivityTemplate, ...]:
        return self._templates

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(template.id for template in self._templates)

    def get(self, activity_id: str) -> Optional[ActivityTemplate]:
        """Returns the template with the given id, or None if it is not registered."""
        return self._by_id.get(activity_id)

    def __contains__(self, activity_id: object) -> bool:
        return activity_id in self._by_id

    def __iter__(self) -> Iterator[ActivityTemplate]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)
