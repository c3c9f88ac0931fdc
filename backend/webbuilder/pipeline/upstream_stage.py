import logging

from webbuilder.errors import UpstreamError, UpstreamReason
from webbuilder.inference.base import LLMClient
from webbuilder.pipeline.context import FailureKind, PipelineFailure, PipelineState
from webbuilder.pipeline.stage import PipelineStage, StageResult

logger = logging.getLogger("webbuilder.pipeline")

GENERATION_FAILED_MESSAGE = "Failed to generate website"

_CATEGORIES = {
    UpstreamReason.TIMEOUT: "timeout",
    UpstreamReason.TRANSPORT: "network",
}


class UpstreamStage(PipelineStage):
    name = "upstream"
    state = PipelineState.CALLING_UPSTREAM

    def __init__(self, client: LLMClient):
        self.client = client

    def run(self, context):
        try:
            context.raw_completion = self.client.generate(context.messages)
            return StageResult.success()
        except UpstreamError as e:
            context.raw_completion = None
            logger.warning("Generation failed (%s): %s", e.reason.value, e)
            return StageResult.failed(
                PipelineFailure(
                    kind=FailureKind.GENERATION_FAILED,
                    message=GENERATION_FAILED_MESSAGE,
                    category=_CATEGORIES.get(e.reason, "upstream"),
                    detail=e.to_detail(),
                )
            )
