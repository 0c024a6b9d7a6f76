"""Generation service: artwork descriptions and placeholder images via Gemini.

Every call is bounded by a timeout and never raises to the caller: failures yield
fallback text (describe) or None (illustrate).
"""
import asyncio
import base64
import logging
from typing import Any, Optional, Sequence

from google import genai
from google.genai import types

logger = logging.getLogger(__name__)

FALLBACK_DESCRIPTION = "A beautiful original artwork for your collection."
EMPTY_RESPONSE_DESCRIPTION = "A stunning piece exploring themes of existence and form."


class GenerationRateLimitError(Exception):
    """Raised when Gemini returns 429 / RESOURCE_EXHAUSTED (quota or rate limit)."""


def _label(value: Any) -> str:
    return getattr(value, "value", value)


def build_description_prompt(title: str, category: Any) -> str:
    return (
        "Write a sophisticated, poetic, and professional 3-sentence art gallery description "
        f'for an artwork titled "{title}" in the category of "{_label(category)}". '
        "Highlight its emotional impact and technical beauty."
    )


def build_image_prompt(title: str, category: Any, tags: Sequence[str]) -> str:
    return (
        f'A professional, high-resolution {_label(category)} masterpiece titled "{title}". '
        "Style: fine art. "
        f"Themes: {', '.join(tags)}. "
        "Lighting: gallery lighting. "
        "Composition: centered, artistic."
    )


def _is_rate_limit(e: Exception) -> bool:
    err_str = str(e).upper()
    return "429" in err_str or "RESOURCE_EXHAUSTED" in err_str


async def _generate_text_gemini_async(client: Any, prompt: str, model: str) -> Optional[str]:
    """Call Gemini async generate_content; returns response text ('' if empty) or None on failure."""
    try:
        response = await client.aio.models.generate_content(model=model, contents=prompt)
    except Exception as e:
        if _is_rate_limit(e):
            raise GenerationRateLimitError(str(e)) from e
        logger.warning("generate_text (Gemini) failed: %s", e)
        return None
    return (getattr(response, "text", None) or "").strip()


def _image_parts(response: Any) -> list:
    parts = getattr(response, "parts", None)
    if parts is None and getattr(response, "candidates", None):
        content = getattr(response.candidates[0], "content", None)
        parts = getattr(content, "parts", None)
    return list(parts or [])


async def _generate_image_gemini_async(client: Any, prompt: str, model: str) -> Optional[str]:
    """Generate a square image; returns base64-encoded PNG data or None."""
    config_kw: dict[str, Any] = {"response_modalities": ["IMAGE"]}
    if hasattr(types, "ImageConfig"):
        config_kw["image_config"] = types.ImageConfig(aspect_ratio="1:1")
    try:
        response = await client.aio.models.generate_content(
            model=model,
            contents=prompt,
            config=types.GenerateContentConfig(**config_kw),
        )
    except Exception as e:
        logger.warning("Image generation failed for %r: %s", prompt[:50], e)
        return None
    for part in _image_parts(response):
        inline = getattr(part, "inline_data", None)
        data = getattr(inline, "data", None) if inline is not None else None
        if not data:
            continue
        if isinstance(data, bytes):
            return base64.b64encode(data).decode("ascii")
        return str(data).strip() or None
    logger.debug("Image generation: no image part in response for %r", prompt[:40])
    return None


class GenerationService:
    """
    Describes and illustrates artworks. Without a Gemini key every call returns
    the fallback immediately.
    """

    def __init__(
        self,
        gemini_api_key: Optional[str] = None,
        default_text_model: Optional[str] = None,
        backup_text_model: Optional[str] = None,
        default_image_model: Optional[str] = None,
        timeout_s: float = 30.0,
        client: Any = None,
    ):
        self._gemini_api_key = (gemini_api_key or "").strip() or None
        self._default_text_model = (default_text_model or "").strip() or "gemini-2.0-flash"
        self._backup_text_model = (backup_text_model or "").strip() or None
        self._default_image_model = (default_image_model or "").strip() or "gemini-2.5-flash-image"
        self._timeout_s = timeout_s
        self._client = client

    @property
    def available(self) -> bool:
        return self._client is not None or self._gemini_api_key is not None

    def _get_client(self) -> Any:
        if self._client is None and self._gemini_api_key:
            self._client = genai.Client(api_key=self._gemini_api_key)
        return self._client

    async def _bounded(self, coro, what: str):
        try:
            return await asyncio.wait_for(coro, timeout=self._timeout_s)
        except asyncio.TimeoutError:
            logger.warning("%s timed out after %.1fs", what, self._timeout_s)
            return None

    async def _text(self, prompt: str) -> Optional[str]:
        client = self._get_client()
        try:
            return await _generate_text_gemini_async(client, prompt, self._default_text_model)
        except GenerationRateLimitError as e:
            backup = self._backup_text_model
            if not backup or backup == self._default_text_model:
                logger.warning("Description generation rate limited: %s", e)
                return None
            logger.info("generate_text 429, retrying with backup model %s", backup)
            try:
                return await _generate_text_gemini_async(client, prompt, backup)
            except GenerationRateLimitError as retry_e:
                logger.warning("Backup text model also rate limited: %s", retry_e)
                return None

    async def describe(self, title: str, category: Any) -> str:
        """Gallery description for an artwork; fallback text on any failure."""
        if not self.available:
            return FALLBACK_DESCRIPTION
        text = await self._bounded(self._text(build_description_prompt(title, category)), "describe")
        if text is None:
            return FALLBACK_DESCRIPTION
        return text or EMPTY_RESPONSE_DESCRIPTION

    async def illustrate(self, title: str, category: Any, tags: Sequence[str]) -> Optional[str]:
        """Generated image as a PNG data URL, or None when nothing could be produced."""
        if not self.available:
            return None
        prompt = build_image_prompt(title, category, tags)
        b64 = await self._bounded(
            _generate_image_gemini_async(self._get_client(), prompt, self._default_image_model),
            "illustrate",
        )
        if not b64:
            return None
        return f"data:image/png;base64,{b64}"
