from webbuilder.inference.prompt import build_messages
from webbuilder.pipeline.context import PipelineState
from webbuilder.pipeline.stage import PipelineStage, StageResult


class FormattingStage(PipelineStage):
    name = "formatting"
    state = PipelineState.FORMATTING

    def run(self, context):
        context.messages = build_messages(context.prompt)
        return StageResult.success()
