from webbuilder.llm.parser import split_sections
from webbuilder.pipeline.context import PipelineState
from webbuilder.pipeline.stage import PipelineStage, StageResult


class SplittingStage(PipelineStage):
    name = "splitting"
    state = PipelineState.SPLITTING

    def run(self, context):
        # Partial or missing sections are valid output
        context.result = split_sections(context.raw_completion)
        context.raw_completion = None
        return StageResult.success()
