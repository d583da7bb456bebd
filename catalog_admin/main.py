from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from catalog_admin.config import get_settings
from catalog_admin.deps import add_cors
from catalog_admin.routers import stores, products
from catalog_admin.routers import attributes

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Catalog Admin API")


@app.on_event("startup")
def on_startup():
    # Ensure all DB tables exist after all models are imported
    from catalog_admin.models.store import Base, engine  # Base/engine single source
    import catalog_admin.models.attributes  # register Category/Size/Color/Gender models
    import catalog_admin.models.product  # register Product/Image models
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready (%s)", engine.url.get_backend_name())
    if get_settings().uses_default_secret:
        logger.warning("SECRET_KEY is not set; tokens are signed with the built-in development key")


def _route_tag(request: Request) -> str:
    route = request.scope.get("route")
    name = getattr(route, "name", None) or request.url.path
    return name.upper()


# Error bodies are plain text; success bodies stay JSON
@app.exception_handler(StarletteHTTPException)
def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        field = ".".join(str(part) for part in errors[0].get("loc", ())[1:]) or "Request"
        return PlainTextResponse(f"{field} is invalid", status_code=400)
    return PlainTextResponse("Invalid request", status_code=400)


@app.exception_handler(Exception)
def internal_error_handler(request: Request, exc: Exception):
    logger.exception("[%s] %s", _route_tag(request), exc)
    return PlainTextResponse("Internal error", status_code=500)


add_cors(app, settings.cors_origins)

# Include routers
app.include_router(stores.router, prefix="/api/stores", tags=["stores"])
app.include_router(attributes.categories, prefix="/api/{storeId}/categories", tags=["categories"])
app.include_router(attributes.sizes, prefix="/api/{storeId}/sizes", tags=["sizes"])
app.include_router(attributes.colors, prefix="/api/{storeId}/colors", tags=["colors"])
app.include_router(attributes.genders, prefix="/api/{storeId}/genders", tags=["genders"])
app.include_router(products.router, prefix="/api/{storeId}/products", tags=["products"])


# --- Entry point for local runs ---
if __name__ == "__main__":
    import uvicorn, os
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("catalog_admin.main:app", host="0.0.0.0", port=port, reload=False)
