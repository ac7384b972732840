from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

import pydantic
import yaml

from inference_gateway.core import logging
from inference_gateway.core.errors import ClientError, ConfigurationError
from inference_gateway.core.types import ModelCandidate, RetryPolicy, TaskKind

DEFAULT_CATALOG_PATH = Path(__file__).parent / "catalog.yml"


class TaskTable(pydantic.BaseModel):
    """Alias table, fallback order and retry policy for one task (or sub-task)."""

    model_config = pydantic.ConfigDict(frozen=True)

    task_kind: TaskKind
    subtask: Optional[str] = None
    default: str
    fallback: tuple[str, ...]
    models: Mapping[str, ModelCandidate]
    retry: RetryPolicy
    hint: str = ""
    timeout_hint: str = ""

    @property
    def aliases(self) -> list[str]:
        return list(self.models)

    def lookup(self, model_key: Optional[str]) -> str:
        """Map a requested key to a known alias, substituting the default."""
        if model_key in self.models:
            return model_key
        for alias, candidate in self.models.items():
            if candidate.backend_id == model_key:
                return alias
        if model_key:
            logging.info(
                f"Unknown model '{model_key}' for {self.task_kind.value}, "
                f"using default '{self.default}'"
            )
        return self.default


class TaskGroup(pydantic.BaseModel):
    """All tables for one task kind; plain kinds hold a single table under None."""

    model_config = pydantic.ConfigDict(frozen=True)

    task_kind: TaskKind
    default_subtask: Optional[str] = None
    tables: Mapping[Optional[str], TaskTable]


def _build_table(
    task_kind: TaskKind,
    subtask: Optional[str],
    spec: dict[str, Any],
    inherited: dict[str, Any],
) -> TaskTable:
    label = f"{task_kind.value}/{subtask}" if subtask else task_kind.value
    models_spec = spec.get("models") or {}
    if not models_spec:
        raise ConfigurationError(f"Catalog table '{label}' has no models")

    models = {
        alias: ModelCandidate(alias=alias, **model_spec)
        for alias, model_spec in models_spec.items()
    }
    default = spec.get("default")
    if default not in models:
        raise ConfigurationError(
            f"Catalog table '{label}' default '{default}' is not a known alias"
        )
    fallback = tuple(spec.get("fallback") or [default])
    unknown = [alias for alias in fallback if alias not in models]
    if unknown:
        raise ConfigurationError(
            f"Catalog table '{label}' fallback lists unknown aliases: {unknown}"
        )

    return TaskTable(
        task_kind=task_kind,
        subtask=subtask,
        default=default,
        fallback=fallback,
        models=MappingProxyType(models),
        retry=RetryPolicy(**(spec.get("retry") or inherited.get("retry") or {})),
        hint=spec.get("hint", inherited.get("hint", "")),
        timeout_hint=spec.get("timeout_hint", inherited.get("timeout_hint", "")),
    )


class ModelCatalog:
    """Read-only model configuration keyed by task kind."""

    def __init__(self, groups: Mapping[TaskKind, TaskGroup]):
        missing = [kind.value for kind in TaskKind if kind not in groups]
        if missing:
            raise ConfigurationError(f"Catalog has no tables for: {missing}")
        self._groups = MappingProxyType(dict(groups))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ModelCatalog":
        tasks = (data or {}).get("tasks") or {}
        groups = {}
        for name, spec in tasks.items():
            try:
                task_kind = TaskKind(name)
            except ValueError as e:
                raise ConfigurationError(f"Catalog names unknown task kind '{name}'") from e

            try:
                if "subtasks" in spec:
                    tables = {
                        subtask: _build_table(task_kind, subtask, sub_spec, spec)
                        for subtask, sub_spec in (spec["subtasks"] or {}).items()
                    }
                    default_subtask = spec.get("default_subtask")
                    if default_subtask not in tables:
                        raise ConfigurationError(
                            f"Catalog '{name}' default sub-task '{default_subtask}' is unknown"
                        )
                else:
                    tables = {None: _build_table(task_kind, None, spec, {})}
                    default_subtask = None
            except pydantic.ValidationError as e:
                raise ConfigurationError(f"Catalog '{name}' is malformed: {e}") from e

            groups[task_kind] = TaskGroup(
                task_kind=task_kind,
                default_subtask=default_subtask,
                tables=MappingProxyType(tables),
            )
        return cls(groups)

    @classmethod
    def load(cls, path: Union[str, Path] = DEFAULT_CATALOG_PATH) -> "ModelCatalog":
        with open(path) as f:
            data = yaml.safe_load(f)
        catalog = cls.from_dict(data)
        logging.info(f"Loaded model catalog from {path}")
        return catalog

    def group(self, task_kind: TaskKind) -> TaskGroup:
        return self._groups[task_kind]

    def table(self, task_kind: TaskKind, subtask: Optional[str] = None) -> TaskTable:
        group = self._groups[task_kind]
        if group.default_subtask is None:
            return group.tables[None]
        name = subtask or group.default_subtask
        if name not in group.tables:
            raise ClientError(f"Unknown task: {name}")
        return group.tables[name]

    def available_models(
        self, task_kind: TaskKind, subtask: Optional[str] = None
    ) -> list[str]:
        group = self._groups[task_kind]
        if group.default_subtask is not None and subtask not in group.tables:
            return [alias for table in group.tables.values() for alias in table.aliases]
        return self.table(task_kind, subtask).aliases

    def describe(self) -> dict[str, Any]:
        """Summary of every table, suitable for a JSON response."""
        summary = {}
        for task_kind, group in self._groups.items():
            entries = {}
            for subtask, table in group.tables.items():
                entries[subtask or "default"] = {
                    "default": table.default,
                    "fallback": list(table.fallback),
                    "models": {
                        alias: {
                            "id": candidate.backend_id,
                            "description": candidate.description,
                            "expectedWait": candidate.expected_wait.model_dump(),
                        }
                        for alias, candidate in table.models.items()
                    },
                }
            summary[task_kind.value] = entries
        return summary
