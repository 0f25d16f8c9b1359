"""Normalization of validated flows.

Converts a :class:`RawFlow` into the canonical :class:`Flow`. The only
transformation is expanding shorthand string constraints into
``Constraint(rule=...)`` objects; every other field, including unknown
top-level keys, passes through unchanged. Input is assumed to be structurally
valid and is not checked again.
"""

from __future__ import annotations

from usermind.dsl.serialization.schema import Constraint, ConstraintInput, Flow, RawFlow

__all__ = ["normalize_constraint", "normalize_flow"]


def normalize_constraint(constraint: ConstraintInput) -> Constraint:
    """Convert one constraint from its input form to the canonical form.

    A bare string becomes a constraint with that rule and no scope. A
    :class:`Constraint` is returned as is, scope included.
    """
    if isinstance(constraint, str):
        return Constraint.model_construct(rule=constraint)
    return constraint


def normalize_flow(raw: RawFlow) -> Flow:
    """Convert a validated :class:`RawFlow` into a normalized :class:`Flow`.

    Args:
        raw: Flow returned by
            :func:`~usermind.dsl.serialization.validation.validate_raw_flow`.

    Returns:
        Flow whose constraints are all :class:`Constraint` objects, in the
        original order.
    """
    # Declared fields in model order, then extras in document order
    fields = {
        name: getattr(raw, name)
        for name in type(raw).model_fields
        if name in raw.model_fields_set
    }
    fields.update(raw.model_extra or {})
    fields["constraints"] = [normalize_constraint(c) for c in raw.constraints]
    return Flow.model_construct(_fields_set=set(fields), **fields)
