"""Domain-level error types."""


class StoreError(RuntimeError):
    """Raised when the backing store rejects or fails a request."""


class EntityNotFoundError(LookupError):
    """Raised when an entity id does not resolve to a stored record."""

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind} {entity_id} not found")
        self.kind = kind
        self.entity_id = entity_id


class InvalidCursorError(ValueError):
    """Raised when a cursor is malformed or belongs to a different query."""
