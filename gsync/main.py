from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gsync import __version__
from gsync.api.router import router
from gsync.config.settings import get_settings
from gsync.exceptions import ConfigError, SourceNotExist, SourceNotGitRepo
from gsync.logging_config import configure_logging

settings = get_settings()
configure_logging(
    verbosity=2 if settings.DEBUG else 1, log_format=settings.GSYNC_LOG_FORMAT
)

app = FastAPI(
    title="gsync",
    version=__version__,
    description="Plan which changed files of a git repository go where on a remote host",
)

app.include_router(router, prefix="/api")


@app.exception_handler(ConfigError)
@app.exception_handler(SourceNotExist)
@app.exception_handler(SourceNotGitRepo)
async def startup_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health")
async def health_check():
    """
    Simple health check endpoint to confirm the API is running.
    """
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.GSYNC_API_HOST, port=settings.GSYNC_API_PORT)
