import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .dependencies import get_ledger
from .routes.factors import router as factors_router
from .routes.parse_trip import router as parse_trip_router
from .routes.trips import router as trips_router
from .services.ledger import InvalidInput, OutOfRange
from .settings import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fail at start-up on a bad factor file, not on the first request
    get_ledger()
    yield


app = FastAPI(
    title="Emission Ledger",
    version="0.1.0",
    description="Per-account trip log with CO₂ computation and a rolling daily total.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(OutOfRange)
async def out_of_range_handler(request: Request, exc: OutOfRange) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.get("/health")
async def health():
    return {"status": "ok", "service": "emission-ledger"}


app.include_router(trips_router)
app.include_router(factors_router)
app.include_router(parse_trip_router)
