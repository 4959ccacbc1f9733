"""Progressive disclosure of journey content.

A :class:`VisibilityRule` bounds a piece of content by pregnancy week and by
journey stage.  :func:`should_show` evaluates one rule; :func:`disclose`
picks between the content and an optional fallback.  Nothing here keeps
state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, TypeVar

if TYPE_CHECKING:
    from src.journey.config_loader import ContentRule

T = TypeVar("T")


@dataclass(frozen=True)
class VisibilityRule:
    """Week and stage bounds for a content block.

    Attributes:
        min_week: Earliest week the content is shown (inclusive).
        max_week: Latest week the content is shown (inclusive).
        stages:   Journey stages the content is shown in.  Empty or ``None``
                  means every stage.  A single stage name is treated as a
                  one-element set.
    """

    min_week: int | None = None
    max_week: int | None = None
    stages: frozenset[str] | None = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.stages, str):
            object.__setattr__(self, "stages", frozenset({self.stages}))
        elif self.stages is not None and not isinstance(self.stages, frozenset):
            object.__setattr__(self, "stages", frozenset(self.stages))

    @classmethod
    def from_dict(cls, raw: dict) -> VisibilityRule:
        stages: Iterable[str] | str | None = raw.get("stages")
        return cls(
            min_week=raw.get("min_week"),
            max_week=raw.get("max_week"),
            stages=stages or None,
        )


def should_show(current_week: int, stage: str, rule: VisibilityRule) -> bool:
    """Return True when ``current_week`` and ``stage`` satisfy every bound of ``rule``."""
    if rule.stages and stage not in rule.stages:
        return False
    if rule.min_week is not None and current_week < rule.min_week:
        return False
    if rule.max_week is not None and current_week > rule.max_week:
        return False
    return True


def disclose(
    current_week: int,
    stage: str,
    rule: VisibilityRule,
    content: T,
    fallback: T | None = None,
) -> T | None:
    """Return ``content`` if the rule passes, else ``fallback`` (which may be None)."""
    if should_show(current_week, stage, rule):
        return content
    return fallback


def visible_content(
    current_week: int,
    stage: str,
    catalog: Iterable[ContentRule],
) -> dict[str, str]:
    """Evaluate a content catalog.

    Returns a mapping of content key to the text to render: the entry's title
    when its rule passes, its fallback otherwise.  Entries that produce
    nothing are left out.
    """
    result: dict[str, str] = {}
    for entry in catalog:
        rendered = disclose(current_week, stage, entry.rule, entry.title, entry.fallback)
        if rendered is not None:
            result[entry.key] = rendered
    return result
