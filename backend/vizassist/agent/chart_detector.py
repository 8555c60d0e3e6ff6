"""
chart_detector.py - Gemini-Powered Chart Type Detection

Given a chart image, asks Gemini which chart type it shows and for R and
Python code that recreates something similar.

Robustness:
  1. Image is downscaled and re-encoded as JPEG before upload (smaller payload)
  2. Response caching: the same image never hits the API twice
  3. Rate limiting with exponential backoff + jitter, then a quota cooldown
  4. Static fallback: ANY failure returns a fixed demo payload, never raises
"""

import asyncio
import hashlib
import io
import json
import os
import random
import time
import traceback

from google import genai
from google.genai import types as genai_types
from PIL import Image, UnidentifiedImageError
from pydantic import ValidationError

from ..config import settings
from ..models.schemas import DetectionResult
from .prompts import DETECTION_FIELDS, DETECTION_PROMPT

RETRY_DELAYS = [5, 15]

FALLBACK_RESULT = DetectionResult(
    chart_type="Bar Chart (Detected - Mock)",
    confidence=88,
    explanation=(
        "This appears to be a vertical bar chart comparing categorical values. "
        "The distinct separated columns are characteristic of this type."
    ),
    r_code="# Mock R Code\nggplot(data, aes(x=cat, y=val)) + geom_bar(stat='identity')",
    python_code="# Mock Python Code\nsns.barplot(data=df, x='cat', y='val')",
    source="fallback",
)

# ── In-memory cache ──────────────────────────────────────────
_detection_cache: dict[str, DetectionResult] = {}

# ── Quota cooldown ───────────────────────────────────────────
_api_cooldown_until: float = 0
_API_COOLDOWN_SECS = 300  # 5 minutes


def _is_api_available() -> bool:
    return time.time() > _api_cooldown_until


def _set_api_cooldown():
    global _api_cooldown_until
    _api_cooldown_until = time.time() + _API_COOLDOWN_SECS
    print(f"[Detector] API cooldown set for {_API_COOLDOWN_SECS}s.")


def clear_cache():
    global _api_cooldown_until
    _detection_cache.clear()
    _api_cooldown_until = 0


def optimize_image(image_bytes: bytes, max_width: int | None = None, quality: int | None = None) -> bytes:
    """
    Downscale to at most `max_width` pixels wide (aspect ratio kept) and
    re-encode as JPEG. Bytes Pillow cannot decode are returned untouched.
    """
    max_width = max_width or settings.IMAGE_MAX_WIDTH
    quality = quality or settings.IMAGE_JPEG_QUALITY
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            img = img.convert("RGB")
            if img.width > max_width:
                height = max(1, round(img.height * max_width / img.width))
                img = img.resize((max_width, height))
            buf = io.BytesIO()
            img.save(buf, format="JPEG", quality=quality)
            return buf.getvalue()
    except (UnidentifiedImageError, OSError):
        return image_bytes


def _resolve_api_key() -> str:
    api_key = settings.GOOGLE_API_KEY
    if not api_key:
        api_key = os.environ.get("GOOGLE_API_KEY", "")
    if not api_key:
        try:
            from dotenv import load_dotenv
            load_dotenv()
            api_key = os.environ.get("GOOGLE_API_KEY", "")
        except ImportError:
            pass
    return api_key


def _response_schema() -> genai_types.Schema:
    return genai_types.Schema(
        type=genai_types.Type.OBJECT,
        properties={
            name: genai_types.Schema(type=getattr(genai_types.Type, kind))
            for name, kind in DETECTION_FIELDS.items()
        },
        required=list(DETECTION_FIELDS),
    )


async def _call_model(image: bytes, api_key: str) -> str:
    """One generate_content round trip; returns the raw JSON text."""
    client = genai.Client(api_key=api_key)
    response = await client.aio.models.generate_content(
        model=settings.GEMINI_MODEL,
        contents=[
            genai_types.Part.from_bytes(data=image, mime_type="image/jpeg"),
            DETECTION_PROMPT,
        ],
        config=genai_types.GenerateContentConfig(
            temperature=0.2,
            response_mime_type="application/json",
            response_schema=_response_schema(),
        ),
    )
    if not response.text:
        raise ValueError("No response from AI")
    return response.text


def parse_detection(text: str) -> DetectionResult:
    """Validate the model's JSON; confidence is clamped into 0-100."""
    payload = json.loads(text)
    if isinstance(payload.get("confidence"), (int, float)):
        payload["confidence"] = min(100, max(0, payload["confidence"]))
    return DetectionResult.model_validate({**payload, "source": "model"})


async def detect_chart_type(image_bytes: bytes) -> DetectionResult:
    """
    Identify the chart type in an image. Flow:
      1. Optimize image → check cache
      2. Skip the API while in quota cooldown or without an API key
      3. Call Gemini with retry + jitter on rate limits
      4. On any failure → FALLBACK_RESULT
    """
    image = optimize_image(image_bytes)
    key = hashlib.md5(image).hexdigest()
    if key in _detection_cache:
        return _detection_cache[key]

    if not _is_api_available():
        print("[Detector] In quota cooldown, using fallback.")
        return FALLBACK_RESULT

    api_key = _resolve_api_key()
    if not api_key:
        print("[Detector] API key not found, using fallback.")
        return FALLBACK_RESULT

    try:
        text = None
        for attempt in range(settings.DETECTION_MAX_RETRIES):
            try:
                text = await _call_model(image, api_key)
                break
            except Exception as retry_err:
                err_str = str(retry_err)
                if "429" in err_str or "RESOURCE_EXHAUSTED" in err_str:
                    if attempt < settings.DETECTION_MAX_RETRIES - 1:
                        delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)] + random.uniform(0, 3)
                        print(f"[Detector] Rate limited, retrying in {delay:.1f}s (attempt {attempt+1})")
                        await asyncio.sleep(delay)
                        continue
                    _set_api_cooldown()
                    print("[Detector] Quota exhausted, using fallback.")
                    return FALLBACK_RESULT
                raise

        if text is None:
            return FALLBACK_RESULT

        result = parse_detection(text)
        _detection_cache[key] = result
        return result

    except (ValidationError, json.JSONDecodeError) as e:
        print(f"[Detector] Malformed model response: {e}. Using fallback.")
        return FALLBACK_RESULT
    except Exception as e:
        traceback.print_exc()
        print(f"[Detector] API failed: {e}. Using fallback.")
        return FALLBACK_RESULT
