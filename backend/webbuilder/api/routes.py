from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends

from webbuilder import config
from webbuilder.api.deps import get_clock, get_current_user, get_user_repository
from webbuilder.api.serializers import failure_response, serialize_result
from webbuilder.db.models import User
from webbuilder.db.users import UserRepository
from webbuilder.inference.base import LLMClient
from webbuilder.inference.config import get_llm_client
from webbuilder.inference.prompt import load_example_prompts
from webbuilder.pipeline.controller import GenerationPipeline
from webbuilder.quota.limiter import remaining
from webbuilder.schemas import (
    ErrorResponse,
    ExamplePromptsResponse,
    GenerateRequest,
    GenerateResponse,
    UsageResponse,
)

router = APIRouter(
    prefix="/api/generator",
    tags=["generator"],
)


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={429: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def generate_website(
    req: GenerateRequest,
    user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
    client: LLMClient = Depends(get_llm_client),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    pipeline = GenerationPipeline(
        client=client,
        users=users,
        limit=config.DAILY_PROMPT_LIMIT,
        clock=clock,
    )
    context = pipeline.run(user.id, req.prompt)

    if context.failed:
        return failure_response(context.failure)

    return serialize_result(context.result)


@router.get("/examples", response_model=ExamplePromptsResponse)
def get_example_prompts(user: User = Depends(get_current_user)):
    return {"examplePrompts": load_example_prompts()}


@router.get("/usage", response_model=UsageResponse)
def get_usage(
    user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    # Read-only view: a stale counter is reported as reset, not written
    counter = users.load_counter(user.id)
    left = remaining(counter, clock(), config.DAILY_PROMPT_LIMIT)

    return {
        "promptsUsedToday": counter.count,
        "dailyPromptsLimit": config.DAILY_PROMPT_LIMIT,
        "remaining": left,
        "promptsResetDate": counter.reset_date,
    }
