import httpx

from inference_gateway.core.config import Settings
from inference_gateway.core.errors import ConfigurationError
from inference_gateway.providers.base import HTTPProvider, ProviderConfig
from inference_gateway.providers.huggingface import HuggingFaceProvider
from inference_gateway.providers.openrouter import OpenRouterProvider


class ProviderManager:
    """Manages provider configurations and initialization"""

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.providers: dict[str, HTTPProvider] = {
            "huggingface": HuggingFaceProvider(
                ProviderConfig(
                    api_key=settings.huggingface_api_key,
                    base_url=settings.huggingface_base_url,
                    env_var="HUGGINGFACE_API_KEY",
                    timeout=settings.request_timeout,
                ),
                client,
            ),
            "openrouter": OpenRouterProvider(
                ProviderConfig(
                    api_key=settings.openrouter_api_key,
                    base_url=settings.openrouter_base_url,
                    env_var="OPENROUTER_API_KEY",
                    timeout=settings.request_timeout,
                    extra_headers={
                        "HTTP-Referer": settings.openrouter_referer,
                        "X-Title": settings.openrouter_title,
                    },
                ),
                client,
            ),
        }

    def get(self, name: str) -> HTTPProvider:
        """Get the provider serving a candidate"""
        if name not in self.providers:
            raise ConfigurationError(f"Unsupported provider: {name}")
        return self.providers[name]
