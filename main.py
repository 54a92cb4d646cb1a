# main.py
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config.settings import settings
from core.exceptions import HubError, ValidationFailure
from core.middleware import setup_middleware
from database.connection import create_all_tables
from modules.dashboard import routes as dashboard_routes
from modules.databases import routes as databases_routes
from modules.directory import routes as directory_routes
from modules.security.auth_routes import router as auth_router
from modules.security.bootstrap import ensure_default_admin
from modules.time_off import routes as time_off_routes

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("rechub")


# ----- Startup -----
@asynccontextmanager
async def lifespan(app: FastAPI):
    create_all_tables()
    ensure_default_admin()
    logger.info("%s started", settings.APP_NAME)
    yield
    logger.info("%s stopped", settings.APP_NAME)


# ----- App instance -----
app = FastAPI(title=settings.APP_NAME, version="1.0.0", lifespan=lifespan)

setup_middleware(app)


@app.exception_handler(HubError)
async def hub_error_handler(request: Request, exc: HubError):
    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.message)
    else:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # same shape as the other error kinds, pydantic's field errors kept under "errors"
    failure = ValidationFailure("Request validation failed")
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, failure.kind, exc.errors())
    content = failure.payload()
    content["errors"] = jsonable_encoder(exc.errors())
    return JSONResponse(status_code=failure.status_code, content=content)


# ----- Routers -----
app.include_router(directory_routes.api_router, prefix="/api/v1", tags=["Directory API"])
app.include_router(time_off_routes.api_router, prefix="/api/v1", tags=["Time Off API"])
app.include_router(databases_routes.api_router, prefix="/api/v1", tags=["Databases API"])
app.include_router(dashboard_routes.api_router, prefix="/api/v1", tags=["Dashboard API"])
app.include_router(auth_router)


@app.get("/health")
def health():
    return {"status": "ok"}


# ----- Entrypoint -----
if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=5000, reload=True)
