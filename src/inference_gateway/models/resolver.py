from typing import Optional

from inference_gateway.core.types import ModelCandidate, TaskKind
from inference_gateway.models.catalog import ModelCatalog


def resolve_candidates(
    catalog: ModelCatalog,
    task_kind: TaskKind,
    model_key: Optional[str] = None,
    subtask: Optional[str] = None,
) -> list[ModelCandidate]:
    """
    Build the attempt order for a request.

    The requested alias (or the table default when the key is absent or
    unknown) comes first, followed by the table's fallback list with the
    requested alias removed and the remaining order preserved.
    """
    table = catalog.table(task_kind, subtask)
    requested = table.lookup(model_key)
    order = [requested] + [alias for alias in table.fallback if alias != requested]
    return [table.models[alias] for alias in order]
