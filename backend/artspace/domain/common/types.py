"""Common domain types."""
from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def generate_id(prefix: str = "") -> str:
    """Generate a short random id, e.g. 'w3f9a1c2d7' for artworks or 'ord-...' for orders."""
    return f"{prefix}{uuid4().hex[:10]}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Record(BaseModel):
    """Base for persisted records: snake_case attributes, camelCase keys on disk."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
