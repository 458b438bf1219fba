"""Identity comparison for persisted records."""

from typing import Any


def same_identity(left: Any, right: Any) -> bool:
    """Return True if both records are persisted and share the same id.

    Records without an assigned id are never considered equal, not even to
    themselves. Records of different classes are never equal.
    """
    if left is None or right is None:
        return False
    if type(left) is not type(right):
        return False
    left_id = getattr(left, "id", None)
    right_id = getattr(right, "id", None)
    return left_id is not None and right_id is not None and left_id == right_id
