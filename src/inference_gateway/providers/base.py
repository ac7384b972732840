import json
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from inference_gateway.core import logging
from inference_gateway.core.errors import (
    ConfigurationError,
    ProviderError,
    ProviderUnreachableError,
)


@dataclass
class ProviderConfig:
    """Configuration for a model provider"""

    api_key: str
    base_url: str
    env_var: str
    timeout: float = 120.0
    extra_headers: dict[str, str] = field(default_factory=dict)


@dataclass
class ProviderResponse:
    """Raw successful response from a provider."""

    content: bytes
    content_type: str = ""
    status: int = 200

    def json(self) -> Any:
        try:
            return json.loads(self.content)
        except ValueError as e:
            raise ProviderError(f"Provider returned invalid JSON: {e}", status=self.status) from e


def _error_message(status: int, reason: str, body: Any) -> str:
    detail = body
    if isinstance(body, dict):
        detail = body.get("error", body)
        if isinstance(detail, dict):
            detail = detail.get("message", detail)
    detail = str(detail).strip() if detail else reason
    return f"{status} {reason}: {detail}"


class HTTPProvider:
    """Shared request plumbing for HTTP inference providers."""

    name = "http"

    def __init__(self, config: ProviderConfig, client: httpx.AsyncClient):
        self.config = config
        self.client = client

    def _headers(self, content_type: Optional[str] = None) -> dict[str, str]:
        if not self.config.api_key:
            raise ConfigurationError(f"{self.config.env_var} is not configured")
        headers = {"Authorization": f"Bearer {self.config.api_key}", **self.config.extra_headers}
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    async def _post(self, url: str, headers: dict[str, str], **kwargs) -> ProviderResponse:
        try:
            response = await self.client.post(
                url, headers=headers, timeout=self.config.timeout, **kwargs
            )
        except httpx.TimeoutException as e:
            raise ProviderUnreachableError(f"Request to {self.name} timed out: {e}") from e
        except httpx.TransportError as e:
            raise ProviderUnreachableError(f"Could not reach {self.name}: {e}") from e

        if response.is_success:
            return ProviderResponse(
                content=response.content,
                content_type=response.headers.get("content-type", ""),
                status=response.status_code,
            )

        try:
            body = response.json()
        except ValueError:
            body = response.text
        message = _error_message(response.status_code, response.reason_phrase, body)
        logging.debug(f"{self.name} returned {response.status_code} for {url}")
        raise ProviderError(
            message,
            status=response.status_code,
            body=body,
            headers=response.headers,
        )
