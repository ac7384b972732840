from typing import Any, Optional

import pydantic


class HealthResponse(pydantic.BaseModel):
    status: str


class FailureResponse(pydantic.BaseModel):
    """Envelope returned for every failed request"""

    model_config = pydantic.ConfigDict(populate_by_name=True)

    success: bool = False
    error: str
    hint: str = ""
    available_models: Optional[list[str]] = pydantic.Field(
        default=None, alias="availableModels"
    )


class SuccessResponse(pydantic.BaseModel):
    """Common fields of every successful response; task payload fields are extra"""

    model_config = pydantic.ConfigDict(extra="allow")

    success: bool = True
    model: str


VIDEO_UNAVAILABLE: dict[str, Any] = {
    "success": False,
    "error": "Video generation is not available on the free HuggingFace tier.",
    "details": (
        "Video models like Text-to-Video MS and Zeroscope require a HuggingFace "
        "Pro subscription or dedicated endpoints."
    ),
    "suggestion": (
        "Use Image Generation with FLUX.1 Schnell or SDXL for visual content. "
        "These models are fast, high-quality, and available on the free tier."
    ),
    "alternativeAction": "image",
    "alternatives": [
        {
            "name": "FLUX.1 Schnell",
            "description": "Fast 4-step image generation with excellent quality",
            "action": "Use Image Generation tool",
        },
        {
            "name": "SDXL",
            "description": "High-quality photorealistic images",
            "action": "Use Image Generation tool",
        },
    ],
    "upgradeOptions": [
        {
            "name": "HuggingFace Pro",
            "price": "$9/month",
            "link": "https://huggingface.co/pricing",
            "features": ["Video generation", "Priority inference", "More models"],
        },
        {
            "name": "Replicate",
            "price": "Pay per use",
            "link": "https://replicate.com",
            "features": ["Stable Video Diffusion", "AnimateDiff", "Many video models"],
        },
    ],
}


TASK_RESPONSES: dict[int, dict[str, Any]] = {
    200: {"model": SuccessResponse},
    400: {"model": FailureResponse, "description": "Missing or invalid request fields"},
    500: {"model": FailureResponse, "description": "Every candidate model failed"},
}
