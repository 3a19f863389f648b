from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from viberooms_core.errors import InvalidEvent
from viberooms_core.types import Action, ContentType, InteractionEvent


class InteractionCreate(BaseModel):
    """Raw card decision as posted by the room UI."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    content_type: str = Field(alias="contentType")
    context_id: str = Field(alias="contextId", min_length=1)
    action: Action
    dwell_ms: int = Field(alias="dwellMs", ge=0)
    timestamp: int = Field(ge=0)
    sequence_index: int = Field(alias="sequenceIndex", ge=0)

    def to_event(self) -> InteractionEvent:
        # content_type stays a plain string here; the normalizer owns that check
        try:
            ct: ContentType | str = ContentType(self.content_type)
        except ValueError:
            ct = self.content_type
        return InteractionEvent(
            content_type=ct,  # type: ignore[arg-type]
            context_id=self.context_id,
            action=self.action,
            dwell_ms=self.dwell_ms,
            timestamp=self.timestamp,
            sequence_index=self.sequence_index,
        )


def parse_interaction(payload: Mapping[str, Any]) -> InteractionEvent:
    try:
        return InteractionCreate.model_validate(payload).to_event()
    except ValidationError as e:
        raise InvalidEvent(f"malformed interaction: {e.error_count()} error(s)") from e
