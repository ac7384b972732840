from inference_gateway.core.errors import (
    AllCandidatesFailedError,
    CandidateNotFoundError,
    CandidateTimeoutError,
    ClientError,
    ConfigurationError,
    GatewayError,
    ProviderError,
    ProviderFatalError,
    ProviderUnreachableError,
)
from inference_gateway.core.types import (
    AttemptOutcome,
    CapabilityLimits,
    Encoding,
    ExpectedWait,
    InferenceRequest,
    InferenceResult,
    ModelCandidate,
    OutcomeStatus,
    RetryPolicy,
    TaskKind,
)

__all__ = [
    "AllCandidatesFailedError",
    "AttemptOutcome",
    "CandidateNotFoundError",
    "CandidateTimeoutError",
    "CapabilityLimits",
    "ClientError",
    "ConfigurationError",
    "Encoding",
    "ExpectedWait",
    "GatewayError",
    "InferenceRequest",
    "InferenceResult",
    "ModelCandidate",
    "OutcomeStatus",
    "ProviderError",
    "ProviderFatalError",
    "ProviderUnreachableError",
    "RetryPolicy",
    "TaskKind",
]
