from typing import Any, Optional

from inference_gateway.providers.base import HTTPProvider, ProviderResponse


class HuggingFaceProvider(HTTPProvider):
    """HuggingFace serverless inference: one POST per model, JSON or raw bytes in."""

    name = "huggingface"

    def _model_url(self, model_id: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{model_id}"

    async def post_json(self, model_id: str, payload: dict[str, Any]) -> ProviderResponse:
        return await self._post(
            self._model_url(model_id),
            self._headers("application/json"),
            json=payload,
        )

    async def post_bytes(
        self, model_id: str, data: bytes, content_type: Optional[str] = None
    ) -> ProviderResponse:
        return await self._post(
            self._model_url(model_id),
            self._headers(content_type or "application/octet-stream"),
            content=data,
        )
