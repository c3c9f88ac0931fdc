from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse

from webbuilder import config
from webbuilder.llm.parser import GenerationResult
from webbuilder.pipeline.context import FailureKind, PipelineFailure

STATUS_CODES = {
    FailureKind.QUOTA_EXCEEDED: 429,
    FailureKind.GENERATION_FAILED: 500,
}


def serialize_result(result: GenerationResult) -> Dict[str, Any]:
    return {
        "success": True,
        "htmlCode": result.markup,
        "cssCode": result.stylesheet,
        "jsCode": result.script,
    }


def error_body(message: str, kind: str, detail: Optional[Any] = None) -> Dict[str, Any]:
    """
    Stable error shape read by the client:
    { success: false, message, errorKind, error }
    """
    if config.is_production() or detail is None:
        detail = {}

    return {
        "success": False,
        "message": message,
        "errorKind": kind,
        "error": detail,
    }


def failure_response(failure: PipelineFailure) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_CODES[failure.kind],
        content=error_body(failure.message, failure.category, failure.detail),
    )
