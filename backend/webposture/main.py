import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from webposture.core.config import settings
from webposture.core.handler import UNKNOWN_CLIENT, perform_scan
from webposture.core.rate_limiter import RateLimiter
from webposture.models.schemas import ScanRequest, ScanResponse

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    limiter = RateLimiter(
        max_requests=settings.rate_limit_max,
        window_seconds=settings.rate_limit_window,
        sweep_interval=settings.rate_limit_sweep,
    )
    limiter.start()
    app.state.rate_limiter = limiter
    try:
        yield
    finally:
        await limiter.stop()


app = FastAPI(title="Web Posture Scanner API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


def client_id_from(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or UNKNOWN_CLIENT
    return request.headers.get("x-real-ip") or UNKNOWN_CLIENT


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/scan", response_model=ScanResponse, response_model_exclude_none=True)
async def start_scan(req: ScanRequest, request: Request):
    return await perform_scan(req, client_id_from(request), request.app.state.rate_limiter)
