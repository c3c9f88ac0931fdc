import logging
from datetime import datetime
from typing import Callable, Optional

from webbuilder.config import DAILY_PROMPT_LIMIT
from webbuilder.db.users import UserRepository
from webbuilder.inference.base import LLMClient
from webbuilder.pipeline.context import GenerationContext, PipelineState
from webbuilder.pipeline.formatting_stage import FormattingStage
from webbuilder.pipeline.quota_stage import QuotaStage
from webbuilder.pipeline.splitting_stage import SplittingStage
from webbuilder.pipeline.upstream_stage import UpstreamStage

logger = logging.getLogger("webbuilder.pipeline")


class GenerationPipeline:
    """
    CHECKING_LIMIT -> FORMATTING -> CALLING_UPSTREAM -> SPLITTING -> DONE

    Any failed stage moves the context to ERROR and stops the run.
    No retries: one upstream attempt per request.
    """

    def __init__(
        self,
        client: LLMClient,
        users: UserRepository,
        limit: int = DAILY_PROMPT_LIMIT,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.stages = [
            QuotaStage(users, limit, clock or datetime.now),
            FormattingStage(),
            UpstreamStage(client),
            SplittingStage(),
        ]

    def run(self, user_id: int, prompt: str) -> GenerationContext:
        context = GenerationContext(user_id=user_id, prompt=prompt)

        for stage in self.stages:
            context.state = stage.state
            logger.info("[%s] user=%s", stage.state.value, user_id)

            result = stage.run(context)

            # Hard stop on failure
            if not result.is_valid:
                context.fail(result.failure)
                logger.warning(
                    "[%s] user=%s kind=%s",
                    PipelineState.ERROR.value,
                    user_id,
                    result.failure.kind.value,
                )
                return context

        context.state = PipelineState.DONE
        logger.info("[%s] user=%s", context.state.value, user_id)
        return context
