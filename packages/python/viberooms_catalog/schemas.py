from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from viberooms_core.types import SCHEME_AXES, CatalogItem, SchemeVector, VectorScheme


class CatalogRecord(BaseModel):
    """One film as emitted by the offline catalog ETL."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    title: str
    year: int | None = None
    rating: float | None = Field(default=None, ge=0, le=10)
    votes: int | None = Field(default=None, ge=0)
    runtime: int | None = Field(default=None, ge=0)
    genres: list[str] = Field(default_factory=list)
    scheme: VectorScheme = VectorScheme.VIBE8
    mood: dict[str, float]

    @field_validator("mood")
    @classmethod
    def _unit_range(cls, v: dict[str, float]) -> dict[str, float]:
        for axis, x in v.items():
            if not 0.0 <= x <= 1.0:
                raise ValueError(f"mood.{axis}={x} is outside [0, 1]")
        return v

    def to_item(self) -> CatalogItem:
        axes = SCHEME_AXES[self.scheme]
        missing = [a for a in axes if a not in self.mood]
        if missing:
            raise ValueError(f"{self.id}: mood is missing {missing} for {self.scheme.value}")
        return CatalogItem(
            id=self.id,
            title=self.title,
            vector=SchemeVector.from_mapping(self.scheme, self.mood),
            year=self.year,
            rating=self.rating,
            votes=self.votes,
            runtime=self.runtime,
            genres=tuple(self.genres),
        )
