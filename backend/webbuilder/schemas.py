from datetime import date
from typing import Any, Dict, List, Union

from pydantic import BaseModel, field_validator


class GenerateRequest(BaseModel):
    prompt: str

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt must not be empty")
        return value


class GenerateResponse(BaseModel):
    success: bool = True
    htmlCode: str = ""
    cssCode: str = ""
    jsCode: str = ""


class ExamplePromptsResponse(BaseModel):
    examplePrompts: List[str]


class UsageResponse(BaseModel):
    promptsUsedToday: int
    dailyPromptsLimit: int
    remaining: int
    promptsResetDate: date


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errorKind: str
    # Diagnostic detail; always {} in production
    error: Union[Dict[str, Any], str] = {}
