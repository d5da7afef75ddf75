import logging

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobhunter.config import settings
from jobhunter.core.rate_limiter import rate_limiter
from jobhunter.database import engine, init_db
from jobhunter.logging_config import setup_logging
from jobhunter.routers import ai, alerts, career, documents, jobs, profile, resumes, saved_jobs
from jobhunter.services import alert_scheduler

setup_logging()
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
}
JWT_SECRET_PLACEHOLDER = "replace-with-the-project-jwt-secret"

app = FastAPI(
    title="JobHunter API",
    description="Job search, application tracking and AI-tailored documents.",
    version="1.0.0",
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(profile.router)
app.include_router(jobs.router)
app.include_router(ai.router)
app.include_router(saved_jobs.router)
app.include_router(resumes.router)
app.include_router(documents.router)
app.include_router(alerts.router)
app.include_router(career.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    errors = jsonable_encoder(exc.errors())
    message = "; ".join(str(e.get("msg", "")) for e in errors) or "Invalid request"
    return JSONResponse(status_code=422, content={"error": message, "details": errors})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.middleware("http")
async def apply_rate_limits(request, call_next):
    path = request.url.path
    if request.method == "OPTIONS":
        return await call_next(request)

    client_ip = request.client.host if request.client else "unknown"
    limit = None
    window = 60
    if path.startswith("/ai/"):
        limit = settings.rate_limit_ai_per_min
    elif path in {"/jobs/search", "/jobs/deep-search"}:
        limit = settings.rate_limit_search_per_min

    if limit is not None and limit > 0:
        key = f"{client_ip}:{path}"
        allowed, retry_after = rate_limiter.allow(key, limit=limit, window_seconds=window)
        if not allowed:
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests. Please retry shortly."},
                headers={"Retry-After": str(retry_after)},
            )

    return await call_next(request)


@app.middleware("http")
async def answer_preflight(request, call_next):
    # Registered last so it runs first: every OPTIONS request is answered here.
    if request.method == "OPTIONS":
        return PlainTextResponse("ok", headers=CORS_HEADERS)
    return await call_next(request)


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


@app.on_event("startup")
def on_startup():
    logger.info("Starting JobHunter API")
    env = (settings.app_env or "development").lower()
    if env in {"production", "prod"}:
        if settings.supabase_jwt_secret == JWT_SECRET_PLACEHOLDER:
            raise RuntimeError("SUPABASE_JWT_SECRET placeholder is not allowed in production")
        if "username:password@" in settings.database_url:
            raise RuntimeError("DATABASE_URL placeholder credentials are not allowed in production")
    else:
        if settings.supabase_jwt_secret == JWT_SECRET_PLACEHOLDER:
            logger.warning("SUPABASE_JWT_SECRET is using placeholder default. Set it in .env for real tokens.")
        if "username:password@" in settings.database_url:
            logger.warning("DATABASE_URL appears to use placeholder credentials. Set DATABASE_URL in .env.")
    for name, value in (("GROQ_API_KEY", settings.groq_api_key), ("ADZUNA_APP_ID", settings.adzuna_app_id)):
        if not value:
            logger.warning("%s is not set; dependent endpoints will report a configuration error.", name)
    init_db()
    if settings.alert_scheduler_enabled:
        started, message = alert_scheduler.start_scheduler()
        logger.info("Alert scheduler: %s", message if started else "not started")


@app.on_event("shutdown")
def on_shutdown():
    alert_scheduler.stop_scheduler()


@app.get("/")
def root():
    return {"message": "JobHunter API. See /docs for the endpoint reference."}
