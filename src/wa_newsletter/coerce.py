"""
Numeric coercion rules for wire attributes and JSON fields.

Every numeric field read off a node attribute or a metadata payload goes
through coerce_int() with its own rule, so its default is looked up in one
place instead of being spelled out at each call site.
"""

from typing import Any, NamedTuple, Optional


class NumericRule(NamedTuple):
    default: Optional[int]
    minimum: Optional[int] = None


NUMERIC_RULES: dict[str, NumericRule] = {
    # update records
    "views": NumericRule(default=0, minimum=0),
    "reaction_count": NumericRule(default=0, minimum=0),
    # metadata records
    "creation_time": NumericRule(default=None),
    "name_time": NumericRule(default=None),
    "description_time": NumericRule(default=None),
    "subscribers": NumericRule(default=None, minimum=0),
}


def coerce_int(field: str, value: Any) -> Optional[int]:
    """Coerce `value` to int using the rule registered for `field`.

    Missing, empty, unparseable and below-minimum values all yield the
    rule's default.
    """
    rule = NUMERIC_RULES[field]
    if value is None or isinstance(value, bool) or value == "":
        return rule.default
    try:
        number = int(value)
    except (TypeError, ValueError):
        try:
            number = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return rule.default
    if rule.minimum is not None and number < rule.minimum:
        return rule.default
    return number


def to_wire(value: Any) -> str:
    """Numbers and numeric strings go over the wire as strings."""
    return str(value).strip()
