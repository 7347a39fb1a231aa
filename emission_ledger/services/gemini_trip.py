import asyncio
import json
import logging
from typing import Any

import google.generativeai as genai  # type: ignore[import-untyped]
from fastapi import HTTPException
from pydantic import ValidationError

from ..models.enums import FuelType, VehicleMode
from ..schemas import TripRequest
from ..settings import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = f"""
You are a Trip Classifier for a CO₂ emission ledger.
The user describes one journey in free text (English or Thai).
Classify it and return ONLY valid JSON.

Allowed vehicle_mode values: {", ".join(m.name for m in VehicleMode)}
- PERSONAL_VEHICLE: own car, taxi, motorbike
- ROADWAYS: bus, coach
- RAILWAYS: train, metro, BTS, MRT
- AIRWAYS: any flight

Allowed fuel_type values: {", ".join(f.name for f in FuelType)}
If the fuel is not stated, use PETROL for personal vehicles, DIESEL for buses,
ELECTRIC for rail and JET_FUEL for flights.

distance_km must be a whole number of kilometres. Convert miles and metres.
If no distance is given, estimate a realistic one.

Return:
{{
  "vehicle_mode": "<VEHICLE_MODE>",
  "fuel_type": "<FUEL_TYPE>",
  "distance_km": <integer>
}}

No explanations. JSON only.
""".strip()


def _get_model() -> genai.GenerativeModel:
    if not settings.gemini_api_key:
        raise HTTPException(
            status_code=500, detail="Trip classifier unavailable: GEMINI_API_KEY is not set"
        )

    try:
        genai.configure(api_key=settings.gemini_api_key)
        return genai.GenerativeModel(
            model_name=settings.gemini_model,
            generation_config={"response_mime_type": "application/json"},
        )
    except Exception as exc:
        logger.exception("Trip classifier model %s failed to load: %s", settings.gemini_model, exc)
        raise HTTPException(status_code=500, detail="Failed to load trip classifier") from exc


def _response_text(response: Any) -> str:
    try:
        return response.text
    except Exception as exc:
        logger.exception("Trip classifier response had no text: %s", exc)
        raise HTTPException(status_code=502, detail="Trip classifier returned no text")


def _strip_code_fences(text: str) -> str:
    body = text.strip()
    if body.startswith("```"):
        body = body.removeprefix("```json").removeprefix("```")
        body = body.removesuffix("```").strip()
    return body


async def interpret_trip(description: str) -> TripRequest:
    """Classify a free-text journey into a recordable trip."""
    model = _get_model()

    user_prompt = f"Trip description:\n{description.strip()}"

    try:
        response = await asyncio.to_thread(
            model.generate_content,
            [SYSTEM_PROMPT, user_prompt],
        )
    except Exception as exc:
        logger.exception("Trip classifier call failed for %r: %s", description, exc)
        raise HTTPException(status_code=502, detail="Trip classifier request failed")

    raw_text = _response_text(response)
    body = _strip_code_fences(raw_text)

    try:
        parsed = json.loads(body)
    except json.JSONDecodeError:
        logger.exception("Trip classifier output is not JSON: %r", raw_text)
        raise HTTPException(status_code=502, detail="Trip classifier returned invalid JSON")

    try:
        return TripRequest.model_validate(parsed)
    except ValidationError:
        logger.exception("Trip classifier output is not a trip: %s", parsed)
        raise HTTPException(status_code=502, detail="Trip classifier returned an unknown trip")
