from enum import Enum
from typing import Any, Optional

import pydantic


class TaskKind(str, Enum):
    TEXT_GENERATION = "text-generation"
    IMAGE_GENERATION = "image-generation"
    SPEECH_TO_TEXT = "speech-to-text"
    TEXT_TO_SPEECH = "text-to-speech"
    VISION = "vision-task"
    MULTIMODAL = "multimodal-task"
    CHAT = "chat"


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    LOADING = "retryable-loading"
    RATE_LIMITED = "retryable-rate-limited"
    NOT_FOUND = "not-found"
    FATAL = "fatal"


class Encoding(str, Enum):
    DATA_URL = "data-url"
    TEXT = "text"
    JSON = "json"


class CapabilityLimits(pydantic.BaseModel):
    """Upper bounds a backend model accepts for numeric generation parameters."""

    model_config = pydantic.ConfigDict(frozen=True)

    max_width: Optional[int] = None
    max_height: Optional[int] = None
    max_tokens: Optional[int] = None

    def clamp(self, constraints: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of `constraints` with every limited value reduced to its limit."""
        clamped = dict(constraints)
        for key, limit in (
            ("width", self.max_width),
            ("height", self.max_height),
            ("max_tokens", self.max_tokens),
        ):
            value = clamped.get(key)
            if limit is not None and value is not None and value > limit:
                clamped[key] = limit
        return clamped


class ExpectedWait(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    min: int = 5
    max: int = 30


class ModelCandidate(pydantic.BaseModel):
    """One concrete backend model eligible to serve a task."""

    model_config = pydantic.ConfigDict(frozen=True, protected_namespaces=())

    alias: str
    backend_id: str
    provider: str = "huggingface"
    description: str = ""
    prompt_format: Optional[str] = None
    limits: CapabilityLimits = CapabilityLimits()
    expected_wait: ExpectedWait = ExpectedWait()


class RetryPolicy(pydantic.BaseModel):
    """Backoff settings applied to each candidate; times are in seconds."""

    model_config = pydantic.ConfigDict(frozen=True)

    max_retries: int = pydantic.Field(default=5, ge=0)
    initial_delay: float = pydantic.Field(default=8.0, gt=0)
    max_delay: float = pydantic.Field(default=30.0, gt=0)
    total_timeout: float = pydantic.Field(default=120.0, gt=0)
    loading_growth: float = pydantic.Field(default=1.5, ge=1.0)
    rate_limit_growth: float = pydantic.Field(default=2.0, ge=1.0)
    # Outcome for 5xx statuses that carry no loading signal
    server_error: OutcomeStatus = OutcomeStatus.FATAL


class InferenceRequest(pydantic.BaseModel):
    """A normalized job description, ready for resolution and invocation."""

    model_config = pydantic.ConfigDict(protected_namespaces=())

    task_kind: TaskKind
    model_key: Optional[str] = None
    subtask: Optional[str] = None
    payload: dict[str, Any] = {}
    constraints: dict[str, Any] = {}


class AttemptOutcome(pydantic.BaseModel):
    """Classification of a single call; decides the invoker's next move."""

    candidate: ModelCandidate
    status: OutcomeStatus
    wait_hint: Optional[float] = None
    message: str = ""


class InferenceResult(pydantic.BaseModel):
    """Terminal value of one invocation."""

    used_model: str
    alias: str
    payload: Any
    encoding: Encoding
    metadata: dict[str, Any] = {}
