import base64
import json

import pytest

from inference_gateway.core.types import Encoding, InferenceRequest, ModelCandidate, TaskKind
from inference_gateway.tasks import (
    ChatHandler,
    ImageGenerationHandler,
    MultimodalHandler,
    SpeechToTextHandler,
    TextGenerationHandler,
    TextToSpeechHandler,
    VisionHandler,
    default_handlers,
)


def _candidate(backend_id="org/model", **kwargs):
    return ModelCandidate(alias="alias", backend_id=backend_id, **kwargs)


def test_default_handlers_cover_every_task_kind():
    assert set(default_handlers()) == set(TaskKind)


@pytest.mark.asyncio
async def test_text_handler_formats_prompt_for_the_candidate(fake_provider):
    # Given
    provider = fake_provider(json.dumps([{"generated_text": " Hello! "}]).encode())
    request = InferenceRequest(
        task_kind=TaskKind.TEXT_GENERATION,
        payload={"prompt": "Hi", "system_prompt": None},
    )

    # When
    result = await TextGenerationHandler().run(
        provider,
        _candidate("microsoft/Phi-3-mini-4k-instruct", prompt_format="phi"),
        request,
        {"max_tokens": 256, "temperature": 0.0},
    )

    # Then
    payload = provider.calls[0]["payload"]
    assert payload["inputs"] == "<|user|>\nHi<|end|>\n<|assistant|>\n"
    assert payload["parameters"]["max_new_tokens"] == 256
    assert payload["parameters"]["do_sample"] is False
    assert result.payload == "Hello!"
    assert result.used_model == "microsoft/Phi-3-mini-4k-instruct"


@pytest.mark.asyncio
async def test_image_handler_returns_data_url_and_dimensions(fake_provider):
    # Given
    provider = fake_provider(b"jpegbytes", "image/jpeg")
    request = InferenceRequest(
        task_kind=TaskKind.IMAGE_GENERATION,
        payload={"prompt": "a fox", "negative_prompt": "blurry"},
    )
    constraints = {"width": 1024, "height": 768, "num_inference_steps": 4, "guidance_scale": 0.0}

    # When
    result = await ImageGenerationHandler().run(provider, _candidate(), request, constraints)

    # Then
    assert provider.calls[0]["payload"]["parameters"]["width"] == 1024
    assert result.encoding is Encoding.DATA_URL
    assert result.payload == "data:image/jpeg;base64," + base64.b64encode(b"jpegbytes").decode()
    assert result.metadata == {"prompt": "a fox", "dimensions": {"width": 1024, "height": 768}}


@pytest.mark.asyncio
async def test_speech_to_text_posts_audio_bytes(fake_provider):
    provider = fake_provider(b'{"text": " hello world "}')
    request = InferenceRequest(
        task_kind=TaskKind.SPEECH_TO_TEXT,
        payload={"audio": b"RIFF", "content_type": "audio/wav"},
    )

    result = await SpeechToTextHandler().run(provider, _candidate(), request, {})

    assert provider.calls[0]["kind"] == "bytes"
    assert provider.calls[0]["content_type"] == "audio/wav"
    assert result.payload == "hello world"
    assert result.metadata == {"mode": "speech-to-text"}


@pytest.mark.asyncio
async def test_text_to_speech_defaults_to_wav(fake_provider):
    provider = fake_provider(b"audio", "application/octet-stream")
    request = InferenceRequest(task_kind=TaskKind.TEXT_TO_SPEECH, payload={"text": "Hello"})

    result = await TextToSpeechHandler().run(provider, _candidate(), request, {})

    assert provider.calls[0]["payload"] == {"inputs": "Hello"}
    assert result.payload.startswith("data:audio/wav;base64,")


@pytest.mark.asyncio
async def test_vision_handler_returns_json_results(fake_provider):
    provider = fake_provider(b'[{"label": "fox", "score": 0.98}]')
    request = InferenceRequest(
        task_kind=TaskKind.VISION, subtask="image-classification", payload={"image": b"png"}
    )

    result = await VisionHandler().run(provider, _candidate(), request, {})

    assert result.payload == [{"label": "fox", "score": 0.98}]
    assert result.metadata == {"task": "image-classification", "resultType": "json"}


@pytest.mark.asyncio
async def test_vision_handler_encodes_depth_maps(fake_provider):
    provider = fake_provider(b"depth", "image/png")
    request = InferenceRequest(
        task_kind=TaskKind.VISION, subtask="depth-estimation", payload={"image": b"png"}
    )

    result = await VisionHandler().run(provider, _candidate(), request, {})

    assert result.payload.startswith("data:image/png;base64,")
    assert result.metadata["resultType"] == "image"


@pytest.mark.asyncio
async def test_multimodal_question_is_sent_as_json(fake_provider):
    # Given
    provider = fake_provider(b'[{"answer": "two", "score": 0.9}]')
    request = InferenceRequest(
        task_kind=TaskKind.MULTIMODAL,
        subtask="visual-qa",
        payload={"image": b"png", "question": "How many cats?"},
    )

    # When
    result = await MultimodalHandler().run(provider, _candidate(), request, {})

    # Then
    inputs = provider.calls[0]["payload"]["inputs"]
    assert inputs == {"image": base64.b64encode(b"png").decode(), "question": "How many cats?"}
    assert result.payload == "two"
    assert result.metadata == {"task": "visual-qa"}


@pytest.mark.asyncio
async def test_captioning_posts_raw_image(fake_provider):
    provider = fake_provider(b'[{"generated_text": "a cat on a sofa"}]')
    request = InferenceRequest(
        task_kind=TaskKind.MULTIMODAL,
        subtask="image-to-text",
        payload={"image": b"png", "question": None},
    )

    result = await MultimodalHandler().run(provider, _candidate(), request, {})

    assert provider.calls[0]["kind"] == "bytes"
    assert result.payload == "a cat on a sofa"


@pytest.mark.asyncio
async def test_chat_handler_returns_reply_and_usage(fake_provider):
    # Given
    completion = {
        "choices": [{"message": {"role": "assistant", "content": "Hi!"}}],
        "usage": {"total_tokens": 12},
    }
    provider = fake_provider(json.dumps(completion).encode())
    messages = [{"role": "user", "content": "Hello"}]
    request = InferenceRequest(task_kind=TaskKind.CHAT, payload={"messages": messages})

    # When
    result = await ChatHandler().run(
        provider, _candidate(), request, {"max_tokens": 4096, "temperature": 0.7}
    )

    # Then
    assert provider.calls[0]["payload"] == {
        "messages": messages,
        "temperature": 0.7,
        "max_tokens": 4096,
        "stream": False,
    }
    assert result.payload == "Hi!"
    assert result.metadata == {"usage": {"total_tokens": 12}}


@pytest.mark.asyncio
async def test_captioning_ignores_a_stray_question(fake_provider):
    # Given
    provider = fake_provider(b'[{"generated_text": "a lighthouse"}]')
    request = InferenceRequest(
        task_kind=TaskKind.MULTIMODAL,
        subtask="image-to-text",
        payload={"image": b"png", "question": "what?"},
    )

    # When
    result = await MultimodalHandler().run(provider, _candidate(), request, {})

    # Then
    assert provider.calls[0]["kind"] == "bytes"
    assert provider.calls[0]["data"] == b"png"
    assert result.payload == "a lighthouse"
