"""Entity store errors.

DuplicateKeyError is the distinguishable condition a store raises when a
write collides with a unique index. Services convert it into the matching
ConflictError so the loser of a check-then-insert race still gets a 409.
"""

from __future__ import annotations

from taskhub.domain.errors.base import ConflictError


class DuplicateKeyError(ConflictError):
    """Raised by an entity store when a unique constraint rejects a write.

    Attributes:
        collection: Collection the write targeted.
        fields: Unique fields involved, when the store can tell.
    """

    def __init__(self, collection: str, fields: tuple[str, ...] = ()) -> None:
        self.collection = collection
        self.fields = fields
        detail = ", ".join(fields) if fields else "unique key"
        super().__init__(f"Duplicate {detail} in {collection}")
