from inference_gateway.providers.base import HTTPProvider, ProviderConfig, ProviderResponse
from inference_gateway.providers.huggingface import HuggingFaceProvider
from inference_gateway.providers.manager import ProviderManager
from inference_gateway.providers.openrouter import OpenRouterProvider

__all__ = [
    "HTTPProvider",
    "HuggingFaceProvider",
    "OpenRouterProvider",
    "ProviderConfig",
    "ProviderManager",
    "ProviderResponse",
]
