import uuid


def validate_uuid(value) -> uuid.UUID | None:
    """Return the value as a UUID, or None when it cannot be parsed."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None
