from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from memos_web.exceptions import NotFoundError, PersistenceError, ValidationError
from memos_web.logging_config import configure_logging
from memos_web.routers import active_filter, memos, shortcuts, tags

# Configure logging at startup
configure_logging()

app = FastAPI(title="Memos Web")

# Routers
app.include_router(shortcuts.router, prefix="/shortcuts", tags=["shortcuts"])
app.include_router(tags.router, prefix="/tags", tags=["tags"])
app.include_router(active_filter.router, prefix="/filter", tags=["filter"])
app.include_router(memos.router, prefix="/memos", tags=["memos"])


@app.exception_handler(ValidationError)
def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": exc.code, "field": exc.field})


@app.exception_handler(NotFoundError)
def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "not-found", "message": str(exc)})


@app.exception_handler(PersistenceError)
def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    status_code = 404 if exc.status_code == 404 else 502
    return JSONResponse(
        status_code=status_code, content={"error": "persistence", "message": exc.message}
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}
