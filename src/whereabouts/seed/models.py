from typing import List

from pydantic import AliasChoices, BaseModel, Field, field_validator

from whereabouts.utils.text_helpers import normalize_all


class SeedEntities(BaseModel):
    """People and places mentioned in the seed note, already normalized."""
    names: List[str] = Field(default_factory=list, description="First names of people")
    places: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("places", "cities"),
        description="City names",
    )

    @field_validator("names", "places")
    @classmethod
    def normalize_entries(cls, v: List[str]) -> List[str]:
        return normalize_all(v)

    @property
    def is_empty(self) -> bool:
        return not self.names and not self.places
