from typing import Protocol

from fusion_recipes.schemas.recipe import GenerationRequest, PromptText, RawModelResponse


class GenerationClient(Protocol):
    def generate(self, request: GenerationRequest, prompt: PromptText) -> RawModelResponse: ...
