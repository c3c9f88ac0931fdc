from webbuilder import config
from .chat_completions_client import ChatCompletionsClient


def get_llm_client() -> ChatCompletionsClient:
    return ChatCompletionsClient(
        base_url=config.PERPLEXITY_BASE_URL,
        model=config.PERPLEXITY_MODEL,
        api_key=config.PERPLEXITY_API_KEY,
        max_tokens=config.GENERATION_MAX_TOKENS,
        timeout=config.GENERATION_TIMEOUT_SECONDS,
    )
