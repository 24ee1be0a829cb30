from typing import Any, Dict, Sequence

from pydantic import BaseModel

from app.core.exceptions import ValidationError


def recognized_changes(
    payload: BaseModel,
    entity: str,
    required: Sequence[str] = (),
    ignore_none: Sequence[str] = (),
) -> Dict[str, Any]:
    """
    Fields the caller actually sent in a partial update.
    Unknown keys are dropped by the request model, so a body made only of
    unknown keys is rejected here before any store write.

    `required` fields may be left out but not cleared: an explicit null is
    rejected. An explicit null on an `ignore_none` field counts as not sent.
    """
    changes = payload.model_dump(exclude_unset=True)
    for field in ignore_none:
        if field in changes and changes[field] is None:
            del changes[field]

    if not changes:
        raise ValidationError(
            f"No recognized fields to update on {entity}",
            details={"recognized_fields": sorted(type(payload).model_fields)},
        )

    cleared = sorted(field for field in required if field in changes and changes[field] is None)
    if cleared:
        raise ValidationError(
            f"{', '.join(cleared)} cannot be null on {entity}",
            details={"fields": cleared},
        )
    return changes
