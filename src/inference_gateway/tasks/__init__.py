from inference_gateway.core.types import TaskKind
from inference_gateway.tasks.audio import SpeechToTextHandler, TextToSpeechHandler
from inference_gateway.tasks.base import BaseTaskHandler
from inference_gateway.tasks.chat import ChatHandler
from inference_gateway.tasks.image import ImageGenerationHandler
from inference_gateway.tasks.text import TextGenerationHandler
from inference_gateway.tasks.vision import MultimodalHandler, VisionHandler


def default_handlers() -> dict[TaskKind, BaseTaskHandler]:
    handlers = [
        TextGenerationHandler(),
        ImageGenerationHandler(),
        SpeechToTextHandler(),
        TextToSpeechHandler(),
        VisionHandler(),
        MultimodalHandler(),
        ChatHandler(),
    ]
    return {handler.task_kind: handler for handler in handlers}


__all__ = [
    "BaseTaskHandler",
    "ChatHandler",
    "ImageGenerationHandler",
    "MultimodalHandler",
    "SpeechToTextHandler",
    "TextGenerationHandler",
    "TextToSpeechHandler",
    "VisionHandler",
    "default_handlers",
]
