import pytest

from inference_gateway.core.errors import ProviderError
from inference_gateway.core.types import Encoding, InferenceResult
from inference_gateway.services import encoder


def test_to_data_url():
    assert encoder.to_data_url(b"abc", "image/png") == "data:image/png;base64,YWJj"


@pytest.mark.parametrize(
    "content_type,expected",
    [
        ("image/jpeg", "image/jpeg"),
        ("image/webp; charset=binary", "image/webp"),
        ("application/octet-stream", "image/png"),
        ("", "image/png"),
    ],
)
def test_binary_mime_type_prefers_the_provider_type(content_type, expected):
    assert encoder.binary_mime_type(content_type, "image", "image/png") == expected


@pytest.mark.parametrize(
    "result",
    [[{"generated_text": "  hello  "}], {"generated_text": "hello"}],
)
def test_generated_text_accepts_list_and_object(result):
    assert encoder.generated_text(result) == "hello"


def test_generated_text_rejects_unexpected_shapes():
    with pytest.raises(ProviderError, match="Unexpected text generation response"):
        encoder.generated_text({"error": "nope"})


def test_chat_text_reads_first_choice():
    result = {"choices": [{"message": {"role": "assistant", "content": " Hi there "}}]}

    assert encoder.chat_text(result) == "Hi there"


def test_chat_text_rejects_empty_choices():
    with pytest.raises(ProviderError):
        encoder.chat_text({"choices": []})


def test_multimodal_text_shapes():
    assert encoder.multimodal_text([{"generated_text": "a dog"}]) == "a dog"
    assert encoder.multimodal_text([{"answer": "two", "score": 0.9}]) == "two"
    assert encoder.multimodal_text([{"label": "cat"}]) == '[{"label": "cat"}]'


def test_envelope_reports_the_backend_that_served():
    result = InferenceResult(
        used_model="google/gemma-2-2b-it",
        alias="gemma",
        payload="hello",
        encoding=Encoding.TEXT,
        metadata={"usage": {"total_tokens": 3}},
    )

    assert encoder.to_envelope(result, "text") == {
        "success": True,
        "text": "hello",
        "model": "google/gemma-2-2b-it",
        "usage": {"total_tokens": 3},
    }
