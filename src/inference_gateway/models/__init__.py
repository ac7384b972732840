from inference_gateway.models.catalog import ModelCatalog, TaskGroup, TaskTable
from inference_gateway.models.resolver import resolve_candidates

__all__ = ["ModelCatalog", "TaskGroup", "TaskTable", "resolve_candidates"]
