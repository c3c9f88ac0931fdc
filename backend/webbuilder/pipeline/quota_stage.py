import logging
from datetime import datetime
from typing import Callable

from webbuilder.db.users import UserRepository
from webbuilder.errors import QuotaExceeded
from webbuilder.pipeline.context import FailureKind, PipelineFailure, PipelineState
from webbuilder.pipeline.stage import PipelineStage, StageResult
from webbuilder.quota.limiter import has_reached_limit

logger = logging.getLogger("webbuilder.pipeline")


def _quota_failure(limit: int) -> PipelineFailure:
    return PipelineFailure(
        kind=FailureKind.QUOTA_EXCEEDED,
        message=str(QuotaExceeded(limit)),
        category="quota_exceeded",
    )


class QuotaStage(PipelineStage):
    """
    Check the daily quota, then take one prompt from it.

    The prompt is consumed BEFORE the upstream call: a failed generation
    still counts against the day.
    """

    name = "quota"
    state = PipelineState.CHECKING_LIMIT

    def __init__(self, users: UserRepository, limit: int, clock: Callable[[], datetime]):
        self.users = users
        self.limit = limit
        self.clock = clock

    def run(self, context):
        now = self.clock()

        counter = self.users.load_counter(context.user_id)
        if counter is None:
            raise LookupError(f"Unknown user {context.user_id}")

        # Fast path, no write
        if has_reached_limit(counter, now, self.limit):
            logger.info("User %s reached the daily limit (%d)", context.user_id, self.limit)
            return StageResult.failed(_quota_failure(self.limit))

        # Compare-and-increment; loses when a concurrent request got there first
        if not self.users.consume_prompt(context.user_id, now.date(), self.limit):
            logger.info("User %s lost the quota race at the limit", context.user_id)
            return StageResult.failed(_quota_failure(self.limit))

        return StageResult.success()
