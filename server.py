""" Server for the outfit suggestion API. """
import logging
import os
import time
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from routers.suggest import router as suggest_router
from utils.constants import CORS_ENABLED, HOST, LOG_FILE, LOG_LEVEL, PORT, STATIC_DIR
from utils.errors import SuggestionError

# Configure logging
handlers = [logging.StreamHandler()]
if LOG_FILE:
    handlers.append(logging.FileHandler(LOG_FILE))
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=handlers
)
logger = logging.getLogger(__name__)

app = FastAPI()

# Request/Response logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """General logging middleware for the server.

    Args:
        request (Request): The request object.
        call_next: The next middleware function to call.

    Returns:
        The response object.
    """
    start_time = time.time()
    logger.info("[LOG]: Request: %s (Path: %s, Query: %s)",
                request.method,
                request.url.path,
                str(request.query_params))

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info("[LOG]: Response: %d - Processed in %.2fs (Path: %s)",
                response.status_code,
                process_time,
                request.url.path)

    return response


@app.exception_handler(SuggestionError)
async def suggestion_error_handler(request: Request, exc: SuggestionError):
    """Turn a pipeline failure into its plain-text HTTP response."""
    logger.error("[LOG]: %s failed with %s: %s", request.url.path, type(exc).__name__, exc)
    return PlainTextResponse(exc.detail, status_code=exc.status_code)


if CORS_ENABLED:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

app.include_router(suggest_router)

# Everything else is the frontend
if os.path.isdir(STATIC_DIR):
    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="frontend")
else:
    logger.warning("Static directory %s not found, frontend disabled", STATIC_DIR)


if __name__ == "__main__":
    logger.info("Starting server on http://%s:%d", HOST, PORT)
    uvicorn.run(app, host=HOST, port=PORT)
