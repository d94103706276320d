# backend/main.py
import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv

load_dotenv()

from config import settings
from database import init_db
from utils.errors import AppError

# Routers
from routes.accounts import router as accounts_router
from routes.employees import router as employees_router
from routes.departments import router as departments_router
from routes.workflows import router as workflows_router
from routes.requests import router as requests_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Retries the initial connection, then re-raises so the process exits
    init_db()
    logger.info("Server configuration: port=%s environment=%s", settings.PORT, settings.ENVIRONMENT)
    yield


app = FastAPI(title="HR Portal API", version="1.0.0", docs_url="/api-docs", lifespan=lifespan)

# CORS: any origin, with credentials so the refresh cookie travels
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=".*",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global error handlers; every error body is {"message": ...}
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = ", ".join(
        f"{'.'.join(str(p) for p in err['loc'] if p != 'body')} {err['msg']}".strip()
        for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"message": f"Validation error: {details}"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    content = {"message": str(exc)}
    if not settings.is_production:
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=500, content=content)


# Register routers
app.include_router(accounts_router)
app.include_router(employees_router)
app.include_router(departments_router)
app.include_router(workflows_router)
app.include_router(requests_router)


@app.get("/")
def read_root():
    return {"message": "Backend API is running"}


def run():
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
