from __future__ import annotations

from enum import Enum
from typing import Optional


class Decision(str, Enum):
    ALLOW = "ALLOW"
    DENY = "DENY"


def authorize(owner_id: Optional[str], caller_uid: Optional[str]) -> Decision:
    """
    Decide whether a caller may mutate a recipe.

    Recipes without an owner are legacy records and stay locked for every
    caller; ownership is never claimable.
    """
    if not owner_id or not caller_uid:
        return Decision.DENY
    if owner_id != caller_uid:
        return Decision.DENY
    return Decision.ALLOW
