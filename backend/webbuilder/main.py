import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from webbuilder import __version__, config
from webbuilder.api.routes import router
from webbuilder.api.serializers import error_body
from webbuilder.db.session import init_db
from webbuilder.errors import AuthenticationError
from webbuilder.logging_config import configure_logging

logger = logging.getLogger("webbuilder.main")

app = FastAPI(
    title="WebBuilder AI",
    version=__version__,
)

# Middleware FIRST
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    expose_headers=["Content-Length", "Content-Type", "Authorization"],
    max_age=86400,
)

# Routes AFTER middleware
app.include_router(router)


@app.get("/")
def health():
    return {"status": "ok"}


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    return JSONResponse(status_code=401, content=error_body(str(exc), "auth"))


def _cors_headers(request: Request) -> dict:
    origin = request.headers.get("origin")
    if origin and ("*" in config.CORS_ORIGINS or origin in config.CORS_ORIGINS):
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
            "Vary": "Origin",
        }
    return {}


# Runs in ServerErrorMiddleware, outside CORSMiddleware: headers are set here
@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=error_body("Server error", "server", {"message": str(exc)}),
        headers=_cors_headers(request),
    )


@app.on_event("startup")
def startup():
    configure_logging()
    # Missing API key is a deployment error, not a per-request one
    config.validate_settings()
    init_db()
    logger.info("WebBuilder AI started (env=%s)", config.APP_ENV)
