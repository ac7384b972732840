from typing import Any

from inference_gateway.providers.base import HTTPProvider, ProviderResponse


class OpenRouterProvider(HTTPProvider):
    """OpenRouter chat completions (OpenAI-compatible)."""

    name = "openrouter"

    async def post_json(self, model_id: str, payload: dict[str, Any]) -> ProviderResponse:
        return await self._post(
            f"{self.config.base_url.rstrip('/')}/chat/completions",
            self._headers("application/json"),
            json={**payload, "model": model_id},
        )
