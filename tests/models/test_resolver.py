import pytest

from inference_gateway.core.errors import ClientError
from inference_gateway.core.types import TaskKind
from inference_gateway.models.resolver import resolve_candidates


def _aliases(candidates):
    return [candidate.alias for candidate in candidates]


def test_requested_alias_comes_first_without_duplicates(catalog):
    candidates = resolve_candidates(catalog, TaskKind.TEXT_GENERATION, "mistral")

    assert _aliases(candidates) == ["mistral", "phi", "gemma", "llama-small"]


def test_alias_outside_the_fallback_list_is_prepended(catalog):
    candidates = resolve_candidates(catalog, TaskKind.TEXT_GENERATION, "qwen-coder")

    assert _aliases(candidates) == ["qwen-coder", "phi", "gemma", "llama-small", "mistral"]


def test_unknown_alias_resolves_to_default(catalog):
    candidates = resolve_candidates(catalog, TaskKind.TEXT_GENERATION, "gpt-99")

    assert candidates[0].backend_id == "microsoft/Phi-3-mini-4k-instruct"
    assert _aliases(candidates) == ["phi", "gemma", "llama-small", "mistral"]


def test_backend_id_is_accepted_as_model_key(catalog):
    candidates = resolve_candidates(
        catalog, TaskKind.IMAGE_GENERATION, "stabilityai/stable-diffusion-xl-base-1.0"
    )

    assert _aliases(candidates) == ["sdxl", "flux-schnell", "sd-3.5-turbo"]


@pytest.mark.parametrize("task_kind", list(TaskKind))
def test_missing_key_starts_with_table_default(catalog, task_kind):
    table = catalog.table(task_kind)

    candidates = resolve_candidates(catalog, task_kind)

    assert candidates[0].alias == table.default
    assert len(_aliases(candidates)) == len(set(_aliases(candidates)))


def test_subtask_selects_its_own_table(catalog):
    candidates = resolve_candidates(catalog, TaskKind.VISION, None, "object-detection")

    assert _aliases(candidates) == ["detr", "yolos"]


def test_unknown_subtask_raises_client_error(catalog):
    with pytest.raises(ClientError):
        resolve_candidates(catalog, TaskKind.MULTIMODAL, None, "video-qa")
