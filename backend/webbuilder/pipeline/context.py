from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from webbuilder.llm.parser import GenerationResult


class PipelineState(Enum):
    CHECKING_LIMIT = "checking_limit"
    FORMATTING = "formatting"
    CALLING_UPSTREAM = "calling_upstream"
    SPLITTING = "splitting"
    DONE = "done"
    ERROR = "error"


class FailureKind(Enum):
    QUOTA_EXCEEDED = "quota_exceeded"      # HTTP 429
    GENERATION_FAILED = "generation_failed"  # HTTP 500


@dataclass
class PipelineFailure:
    kind: FailureKind
    message: str
    # Client-facing category: quota_exceeded | timeout | network | upstream
    category: str
    detail: Optional[Dict[str, Any]] = None


@dataclass
class GenerationContext:
    # Raw input (authoritative)
    user_id: int
    prompt: str

    state: PipelineState = PipelineState.CHECKING_LIMIT

    # Formatting
    messages: List[Dict[str, str]] = field(default_factory=list)

    # Upstream
    raw_completion: Optional[str] = None

    # Splitting
    result: Optional[GenerationResult] = None

    failure: Optional[PipelineFailure] = None

    @property
    def succeeded(self) -> bool:
        return self.state == PipelineState.DONE

    @property
    def failed(self) -> bool:
        return self.state == PipelineState.ERROR

    def fail(self, failure: PipelineFailure):
        self.failure = failure
        self.state = PipelineState.ERROR
