from typing import Any, Dict, Iterable
from pydantic import BaseModel


def patch_fields(patch: BaseModel, skip: Iterable[str] = ()) -> Dict[str, Any]:
    """Return the fields of a patch schema that were sent and are not null"""
    skipped = set(skip)
    return {
        field: value
        for field, value in patch.model_dump(exclude_unset=True, exclude_none=True).items()
        if field not in skipped
    }


def merge_patch(target: Any, patch: BaseModel, skip: Iterable[str] = ()) -> Dict[str, Any]:
    """Copy present, non-null patch fields onto target.

    Returns the applied fields so callers can react to specific changes.
    """
    changes = patch_fields(patch, skip)
    for field, value in changes.items():
        setattr(target, field, value)
    return changes
