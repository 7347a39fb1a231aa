import logging
from functools import lru_cache

from .services.emission_factors import EmissionFactorTable
from .services.ledger import EmissionLedger
from .settings import settings

logger = logging.getLogger(__name__)


@lru_cache
def get_ledger() -> EmissionLedger:
    """Process-wide ledger built once from settings."""
    if settings.emission_factors_file:
        factors = EmissionFactorTable.from_json_file(settings.emission_factors_file)
    else:
        factors = EmissionFactorTable()

    logger.info(
        "Emission ledger ready: %d factors, %ds window",
        len(factors),
        settings.emission_window_seconds,
    )
    return EmissionLedger(factors=factors, window_seconds=settings.emission_window_seconds)
