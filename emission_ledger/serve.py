import uvicorn

from .settings import settings


def main() -> None:
    uvicorn.run(
        "emission_ledger.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
