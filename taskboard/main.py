import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from taskboard.core.config import settings
from taskboard.core.database import init_db
from taskboard.core.errors import TaskBoardError, StorageError
from taskboard.core.logging import configure_logging
from taskboard.routers import health, tasks, tags

configure_logging()
logger = logging.getLogger(__name__)

# Init DB
init_db()

app = FastAPI(
    title="Task Board API",
    version="1.0.0"
)


# Erreurs métier -> {"error": ...} avec le code HTTP de l'erreur
@app.exception_handler(TaskBoardError)
async def handle_taskboard_error(request: Request, exc: TaskBoardError):
    if isinstance(exc, StorageError):
        logger.error("%s %s: %s", request.method, request.url.path, exc.message, exc_info=exc.__cause__)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# JSON illisible, id non entier, champ requis absent
@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "invalid request") if errors else "invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


# Routes
app.include_router(health.router, prefix="/api")
app.include_router(tasks.router)
app.include_router(tags.router)

# Front statique optionnel
if Path(settings.STATIC_DIR).is_dir():
    app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")


def run():
    import uvicorn

    logger.info("HTTP server listening on %s:%s", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, timeout_keep_alive=60, log_config=None)


if __name__ == "__main__":
    run()
