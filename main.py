import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from store_api.api.routes import auth, categories, orders, products, users
from store_api.core.config import settings
from store_api.core.database import engine
from store_api.core.exceptions import StoreValidationError
from store_api.core.log_config import configure_logging
from store_api.models.database import Base

configure_logging(settings.log_level)
logger = logging.getLogger("store_api")

# Paths that are not worth a log line per request
QUIET_PATHS = ("/health", "/docs", "/openapi.json", "/favicon.ico")


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Store API is now running")
    yield


app = FastAPI(
    title="Store API",
    description="Online store backend: catalog, users and orders",
    version="1.0.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(products.router, prefix="/api/products", tags=["products"])
app.include_router(categories.router, prefix="/api/categories", tags=["categories"])
app.include_router(orders.router, prefix="/api/orders", tags=["orders"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])


@app.middleware("http")
async def log_requests(request: Request, call_next):
    path = request.url.path
    if path.startswith(QUIET_PATHS):
        return await call_next(request)

    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    level = logging.DEBUG
    if response.status_code >= 400 or elapsed_ms > settings.slow_request_ms:
        level = logging.WARNING
    logger.log(level, f"{request.method} {path} responded {response.status_code} in {elapsed_ms:.0f}ms")
    return response


@app.exception_handler(StoreValidationError)
async def validation_error_handler(request: Request, exc: StoreValidationError):
    return JSONResponse(status_code=400, content={"message": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception during {request.method} {request.url.path}")
    message = "An error occurred processing your request."
    if settings.is_development:
        message = f"Internal server error: {exc}"
    return JSONResponse(status_code=500, content={"message": message})


@app.get("/")
async def root():
    return {"message": "Store API"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
