import logging
from typing import Any

import httpx

from fusion_recipes.schemas.recipe import GenerationRequest, PromptText, RawModelResponse
from fusion_recipes.services.errors import AuthConfigError, TransportError, UpstreamError

logger = logging.getLogger(__name__)


class RelayGenerationClient:
    """Posts the request to the trusted relay function that holds the credential.

    The relay renders its own prompt from the request fields, so ``prompt``
    is not sent over the wire.
    """

    def __init__(
        self,
        relay_url: str | None,
        token: str | None = None,
        timeout_seconds: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not relay_url:
            raise AuthConfigError("RELAY_URL is required when GENERATION_TRANSPORT=relay")
        self._relay_url = relay_url
        self._token = token
        self._timeout_seconds = timeout_seconds
        self._http_client = http_client

    def generate(self, request: GenerationRequest, prompt: PromptText) -> RawModelResponse:
        body: dict[str, Any] = {
            "dish_type": request.dish_type,
            "cuisines": request.cuisines,
            "dietary_tags": request.dietary_tags,
        }
        if request.custom_ingredients:
            body["custom_ingredients"] = request.custom_ingredients

        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        try:
            if self._http_client is not None:
                response = self._http_client.post(
                    self._relay_url, json=body, headers=headers, timeout=self._timeout_seconds
                )
            else:
                with httpx.Client(timeout=self._timeout_seconds) as client:
                    response = client.post(self._relay_url, json=body, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning(
                "relay_generation_call",
                extra={
                    "outcome": "failure",
                    "transport": "relay",
                    "error_class": exc.__class__.__name__,
                },
            )
            raise TransportError(f"Relay unreachable: {exc.__class__.__name__}") from exc

        if response.is_error:
            logger.warning(
                "relay_generation_call",
                extra={
                    "outcome": "failure",
                    "transport": "relay",
                    "error_class": "upstream",
                    "status_code": response.status_code,
                },
            )
            raise UpstreamError(response.status_code, response.text)

        return RawModelResponse(transport="relay", payload=response.text)
