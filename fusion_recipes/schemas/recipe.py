from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Difficulty = Literal["easy", "medium", "hard"]
Transport = Literal["relay", "direct"]

PROMPT_SCHEMA_VERSION = "2"


class GenerationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    dish_type: str = Field(min_length=1)
    cuisines: list[str] = Field(min_length=1, max_length=2)
    dietary_tags: list[str] = Field(default_factory=list)
    custom_ingredients: list[str] = Field(default_factory=list)


class GeneratedRecipe(BaseModel):
    """One recipe entry as the model is asked to emit it.

    The first example of each field is rendered into the prompt, so the
    prompt contract and the parser cannot drift apart. Echoed fields
    (cuisines, dietary_tags, dish_type) are always overwritten from the
    originating request.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(
        min_length=1,
        examples=["A creative and descriptive name that reflects the fusion of cuisines"],
    )
    flavor_text: str = Field(
        min_length=1,
        examples=[
            "A compelling description (2-3 sentences) highlighting the unique flavor "
            "combinations, textures, and cultural fusion"
        ],
    )
    ingredients: list[str] = Field(
        min_length=1,
        examples=[
            [
                "Precise ingredient with exact measurement (e.g., '2 tablespoons soy sauce')",
                "Each ingredient should include quantity and any specific notes",
            ]
        ],
    )
    steps: list[str] = Field(
        min_length=1,
        examples=[
            [
                "Detailed step with timing and specific techniques (e.g., 'Saute onions over "
                "medium heat for 5 minutes until translucent')",
                "Each step should be clear and actionable",
            ]
        ],
    )
    cooking_time: str = Field(min_length=1, examples=["Total time in format: 1 hour 30 minutes"])
    prep_time_min: int = Field(ge=0, examples=[45])
    cuisines: list[str] | None = Field(default=None, examples=[["Each cuisine named above"]])
    dietary_tags: list[str] | None = Field(
        default=None, examples=[["Each dietary requirement named above, if any"]]
    )
    dish_type: str | None = Field(default=None, examples=["The dish type named above"])

    @field_validator("title", "flavor_text", "cooking_time", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        return value.strip()


ECHOED_FIELDS = ("cuisines", "dietary_tags", "dish_type")


class Recipe(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    title: str
    flavor_text: str
    ingredients: list[str]
    steps: list[str]
    cooking_time: str
    prep_time_min: int = Field(ge=0)
    cuisines: list[str]
    dietary_tags: list[str] = Field(default_factory=list)
    dish_type: str
    difficulty: Difficulty = "medium"
    is_favorite: bool = False


class PromptText(BaseModel):
    model_config = ConfigDict(frozen=True)

    system: str
    user: str

    def messages(self) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]


class RawModelResponse(BaseModel):
    """Undecoded upstream payload plus the transport that produced it.

    Direct calls carry the chat completion body; relay calls carry the
    relay's already-unwrapped recipe array.
    """

    transport: Transport
    payload: Any = None
