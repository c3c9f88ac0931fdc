from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from webbuilder.pipeline.context import GenerationContext, PipelineFailure, PipelineState


@dataclass
class StageResult:
    is_valid: bool
    failure: Optional[PipelineFailure] = None

    @classmethod
    def success(cls):
        return cls(is_valid=True)

    @classmethod
    def failed(cls, failure: PipelineFailure):
        return cls(is_valid=False, failure=failure)


class PipelineStage(ABC):
    name: str
    state: PipelineState

    @abstractmethod
    def run(self, context: GenerationContext) -> StageResult:
        """
        Must:
        - read from context
        - write to context
        - NEVER call other stages
        """
        pass
