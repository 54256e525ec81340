"""Tag filtering domain exports."""

from .tag_policy import EffectiveTagFilter, PolicyTag, marker_expression, resolve_tag_filter

__all__ = [
    "EffectiveTagFilter",
    "PolicyTag",
    "marker_expression",
    "resolve_tag_filter",
]
