"""Default include/exclude tag policy."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from testrun_orchestrator.errors import ValidationError

_EXPRESSION_KEYWORDS = frozenset({"and", "or", "not"})


class PolicyTag(str, Enum):
    """Tags with built-in meaning for the default run."""

    OPT_IN_ONLY = "CAWhatIf"
    EXTENDED = "Full"
    EVERYTHING = "All"


@dataclass(frozen=True)
class EffectiveTagFilter:
    """Include/exclude tag sets after default policy injection."""

    include: frozenset[str] = frozenset()
    exclude: frozenset[str] = frozenset()


def resolve_tag_filter(
    include_tags: Iterable[str] = (),
    exclude_tags: Iterable[str] = (),
) -> EffectiveTagFilter:
    """Apply the default tag policy on top of user-supplied tags.

    Opt-in-only tests never run unless their tag is included. A run without
    include tags leaves out the extended suite, and asking for the extended
    suite also pulls in the umbrella category.

    Raises:
      ValidationError: If a tag is not a valid marker name.
    """
    include = set(include_tags)
    exclude = set(exclude_tags)
    _validate_tags(include, "tag")
    _validate_tags(exclude, "exclude_tag")

    if PolicyTag.OPT_IN_ONLY.value not in include:
        exclude.add(PolicyTag.OPT_IN_ONLY.value)
    if not include:
        exclude.add(PolicyTag.EXTENDED.value)
    elif PolicyTag.EXTENDED.value in include:
        include.add(PolicyTag.EVERYTHING.value)

    return EffectiveTagFilter(include=frozenset(include), exclude=frozenset(exclude))


def marker_expression(include: Iterable[str], exclude: Iterable[str]) -> str | None:
    """Render include/exclude tags as a pytest ``-m`` expression."""
    clauses = []
    included = sorted(set(include))
    if included:
        clauses.append("(" + " or ".join(included) + ")")
    clauses.extend(f"not {tag}" for tag in sorted(set(exclude)))
    return " and ".join(clauses) or None


def _validate_tags(tags: Iterable[str], parameter: str) -> None:
    for tag in tags:
        if not tag.isidentifier() or tag in _EXPRESSION_KEYWORDS:
            raise ValidationError(
                parameter, f"'{tag}' is not a valid tag; use a marker name such as 'Smoke'."
            )
