from pydantic import BaseModel, ConfigDict, Field


class Profile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    medical_health_preferences: list[str] = Field(default_factory=list)
    lifestyle_dietary_preferences: list[str] = Field(default_factory=list)
    religious_preferences: list[str] = Field(default_factory=list)
    pantry_items: list[str] = Field(default_factory=list)


class PreferenceSelections(BaseModel):
    """Raw choices from the create-recipe form."""

    model_config = ConfigDict(extra="forbid")

    dish_type: str | None = None
    cuisines: list[str] = Field(default_factory=list)
    medical: list[str] = Field(default_factory=list)
    lifestyle: list[str] = Field(default_factory=list)
    religious: list[str] = Field(default_factory=list)
    pantry_items: list[str] = Field(default_factory=list)
    custom_ingredients: list[str] = Field(default_factory=list)
    use_profile_prefs: bool = False
