"""Learning item model."""

from typing import Any

from pydantic import BaseModel, Field


class Item(BaseModel):
    """A drillable item supplied by the vocabulary source.

    Only `id` matters to the scheduler; `ordinal` drives range filtering and
    `content` is passed through to the presentation layer untouched.
    """

    id: str = Field(..., min_length=1, description="Stable identifier, unique within a pool")
    ordinal: int = Field(0, ge=0, description="Word number used for range filtering")
    content: dict[str, Any] = Field(default_factory=dict, description="Opaque presentation fields")

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "id": "あはれ|しみじみとした趣",
                "ordinal": 1,
                "content": {"lemma": "あはれ", "sense": "しみじみとした趣"},
            }
        }
