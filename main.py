from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config.database import AsyncSessionLocal, Base, engine
from shared.config.settings import SERVICE_NAME
from shared.observability import setup_observability
from shared.jobs.router import router as failed_jobs_router

# IMPORTANT: import models so they register with Base
from services.order_service import models as order_models
from services.inventory_service import models as inventory_models
from shared.jobs import models as job_models

from services.order_service.dependencies import build_order_service
from services.order_service.router import router as orders_router
from services.order_service.schemas import VALIDATION_MESSAGES

app = FastAPI(title="Order Processing API", version="1.0.0")

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(app, SERVICE_NAME)

# Each app owns its ledger, job queue and event bus
app.state.order_service = build_order_service(AsyncSessionLocal)
app.state.job_queue = app.state.order_service.jobs


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path"))
        message = VALIDATION_MESSAGES.get((field, error["type"]), error["msg"])
        errors.setdefault(field or "body", []).append(message)
    return JSONResponse(
        status_code=422,
        content={"message": "The given data was invalid.", "errors": errors},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.get("/health", include_in_schema=False)
async def health_check():
    return {
        "service": SERVICE_NAME,
        "status": "running",
        "job_workers": app.state.job_queue.running,
    }


app.include_router(orders_router, prefix="/orders")
app.include_router(failed_jobs_router, prefix="/failed-jobs")


@app.on_event("startup")
async def startup_event():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app.state.job_queue.start()


@app.on_event("shutdown")
async def shutdown_event():
    await app.state.job_queue.stop()

    webhook = app.state.order_service.webhook
    if webhook is not None:
        await webhook.aclose()
    await engine.dispose()
