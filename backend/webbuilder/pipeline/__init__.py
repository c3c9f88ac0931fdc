"""
Website generation pipeline.
"""

from webbuilder.pipeline.context import (
    FailureKind,
    GenerationContext,
    PipelineFailure,
    PipelineState,
)
from webbuilder.pipeline.controller import GenerationPipeline

__all__ = [
    "GenerationPipeline",
    "GenerationContext",
    "PipelineFailure",
    "PipelineState",
    "FailureKind",
]
