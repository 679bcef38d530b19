import json
import logging
from typing import Any

from fusion_recipes.schemas.recipe import GenerationRequest, PromptText, RawModelResponse
from fusion_recipes.services.errors import (
    AuthConfigError,
    RecipePipelineError,
    TransportError,
    UpstreamError,
)

logger = logging.getLogger(__name__)


class DirectGenerationClient:
    """Chat completion against an OpenAI-compatible endpoint.

    One attempt per call: SDK retries are disabled and every failure is
    raised as a typed pipeline error for the caller to handle.
    """

    _TEMPERATURE = 0.7
    _MAX_TOKENS = 2000

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout_seconds: float = 30.0,
        client: Any | None = None,
    ) -> None:
        self._model = model
        self._timeout_seconds = timeout_seconds
        if client is not None:
            self._client = client
            return

        if not api_key:
            raise AuthConfigError("LLM API key is not configured")

        try:
            from openai import OpenAI  # type: ignore[import-not-found]
        except ModuleNotFoundError as exc:
            raise RuntimeError(
                "openai package is required for GENERATION_TRANSPORT=direct"
            ) from exc

        self._client = OpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
            timeout=timeout_seconds,
        )

    def generate(self, request: GenerationRequest, prompt: PromptText) -> RawModelResponse:
        try:
            completion = self._client.chat.completions.create(
                model=self._model,
                messages=prompt.messages(),
                temperature=self._TEMPERATURE,
                max_tokens=self._MAX_TOKENS,
                timeout=self._timeout_seconds,
            )
        except Exception as exc:
            error = self._classify_api_error(exc)
            logger.warning(
                "llm_chat_completion",
                extra={
                    "outcome": "failure",
                    "transport": "direct",
                    "error_class": error.error_class,
                    "cuisines_count": len(request.cuisines),
                },
            )
            raise error from exc

        if hasattr(completion, "model_dump"):
            payload = completion.model_dump()
        else:
            payload = completion
        return RawModelResponse(transport="direct", payload=payload)

    @staticmethod
    def _classify_api_error(exc: Exception) -> RecipePipelineError:
        error_name = exc.__class__.__name__
        if error_name in ("APITimeoutError", "APIConnectionError"):
            return TransportError(f"LLM endpoint unreachable: {error_name}")

        status_code = getattr(exc, "status_code", None)
        if not isinstance(status_code, int):
            response = getattr(exc, "response", None)
            status_code = getattr(response, "status_code", None)

        if isinstance(status_code, int):
            if status_code in (401, 403):
                # Bad or revoked key.
                return AuthConfigError(f"LLM endpoint rejected credential (HTTP {status_code})")
            return UpstreamError(status_code, _error_body(exc))

        return TransportError(f"LLM request failed: {error_name}")


def _error_body(exc: Exception) -> str:
    body = getattr(exc, "body", None)
    if body is None:
        return str(exc)
    if isinstance(body, str):
        return body
    return json.dumps(body, default=str)
