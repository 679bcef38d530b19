from fusion_recipes.core.config import Settings, get_settings
from fusion_recipes.services.client_base import GenerationClient
from fusion_recipes.services.client_direct import DirectGenerationClient
from fusion_recipes.services.client_relay import RelayGenerationClient
from fusion_recipes.services.credentials import get_llm_api_key


def get_direct_client(settings: Settings | None = None) -> GenerationClient:
    config = settings or get_settings()
    return DirectGenerationClient(
        api_key=get_llm_api_key(config),
        model=config.llm_model,
        base_url=config.llm_base_url,
        timeout_seconds=config.generation_timeout_seconds,
    )


def get_generation_client(settings: Settings | None = None) -> GenerationClient:
    config = settings or get_settings()

    if config.generation_transport == "direct":
        return get_direct_client(config)

    return RelayGenerationClient(
        relay_url=config.relay_url,
        token=config.relay_token,
        timeout_seconds=config.generation_timeout_seconds,
    )
