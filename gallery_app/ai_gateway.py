# gallery_app/ai_gateway.py
from __future__ import annotations

import asyncio
import json
import mimetypes
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Protocol

import requests
from loguru import logger
from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from config import settings

from .encoder import decode, encode
from .errors import EncodeError
from .models import (
    AiAnalysis,
    AnalysisMalformed,
    AnalysisOk,
    AnalysisResult,
    EditAbsent,
    EditOk,
    EditResult,
    GatewayError,
)


ANALYSIS_PROMPT = (
    "Analyze this image and provide a structured JSON response. "
    "Include a short descriptive title, a poetic description, a list of 5 tags, "
    "and a broad category (e.g., Nature, People, Architecture, Tech). "
    'Respond with a JSON object with the keys "title", "description", '
    '"tags" and "category".'
)


class AiGateway(Protocol):
    """The remote model, as seen by the gallery. Failures come back as values."""

    async def analyze(self, image_data: str) -> AnalysisResult:
        ...

    async def edit(self, image_data: str, instruction: str) -> EditResult:
        ...


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------


def parse_analysis(raw: str) -> AnalysisResult:
    """
    Validate the model's JSON answer. Anything unusable becomes
    AnalysisMalformed rather than an exception.
    """
    try:
        data = json.loads(raw or "")
    except json.JSONDecodeError as e:
        return AnalysisMalformed(reason=f"response is not JSON: {e}", raw=raw or "")

    if not isinstance(data, dict):
        return AnalysisMalformed(reason="response is not a JSON object", raw=raw)

    try:
        analysis = AiAnalysis.model_validate(data)
    except ValidationError as e:
        return AnalysisMalformed(
            reason=f"response is missing fields: {e.error_count()} error(s)", raw=raw
        )
    return AnalysisOk(analysis=analysis)


def _fetch_image(url: str) -> bytes:
    resp = requests.get(url, timeout=60)
    resp.raise_for_status()
    return resp.content


# ---------------------------------------------------------------------------
# OpenAI implementation
# ---------------------------------------------------------------------------


class OpenAiGateway:
    """
    AiGateway backed by the OpenAI API.

    analyze() uses a vision-capable chat model in JSON mode; edit() uses the
    image edit endpoint (gpt-image-1 by default). Each call opens its own
    AsyncOpenAI client, since every user action runs in a fresh event loop.
    A key of None falls back to OPENAI_API_KEY from
    settings; an empty key is reported as a GatewayError, not at import.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        analysis_model: Optional[str] = None,
        edit_model: Optional[str] = None,
        client: Any = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self.analysis_model = analysis_model or settings.GALLERY_ANALYSIS_MODEL
        self.edit_model = edit_model or settings.GALLERY_EDIT_MODEL
        self._client = client

    @classmethod
    def from_settings(cls) -> "OpenAiGateway":
        return cls(api_key=settings.OPENAI_API_KEY)

    @asynccontextmanager
    async def _client_session(self) -> AsyncIterator[Any]:
        """
        Yield an OpenAI client, or None if no API key is configured.
        """
        if self._client is not None:
            yield self._client
            return
        if not self._api_key:
            yield None
            return
        client = AsyncOpenAI(api_key=self._api_key)
        try:
            yield client
        finally:
            await client.close()

    async def analyze(self, image_data: str) -> AnalysisResult:
        async with self._client_session() as client:
            if client is None:
                return GatewayError("OPENAI_API_KEY is not set in the environment.")

            try:
                response = await client.chat.completions.create(
                    model=self.analysis_model,
                    messages=[
                        {
                            "role": "user",
                            "content": [
                                {"type": "image_url", "image_url": {"url": image_data}},
                                {"type": "text", "text": ANALYSIS_PROMPT},
                            ],
                        }
                    ],
                    response_format={"type": "json_object"},
                )
            except OpenAIError as e:
                logger.warning("Image analysis request failed: {!r}", e)
                return GatewayError(f"Image analysis failed: {e}", e)

        try:
            raw = response.choices[0].message.content or ""
        except (AttributeError, IndexError):
            return AnalysisMalformed(reason="response has no message content")

        result = parse_analysis(raw)
        if isinstance(result, AnalysisMalformed):
            logger.warning("Image analysis was malformed: {}", result.reason)
        return result

    async def edit(self, image_data: str, instruction: str) -> EditResult:
        try:
            image_bytes, mime_type = decode(image_data)
        except EncodeError as e:
            return GatewayError(str(e), e)
        extension = mimetypes.guess_extension(mime_type) or ".png"

        async with self._client_session() as client:
            if client is None:
                return GatewayError("OPENAI_API_KEY is not set in the environment.")

            try:
                response = await client.images.edit(
                    model=self.edit_model,
                    image=(f"photo{extension}", image_bytes, mime_type),
                    prompt=instruction,
                )
            except OpenAIError as e:
                logger.warning("Image edit request failed: {!r}", e)
                return GatewayError(f"Image edit failed: {e}", e)

        for item in getattr(response, "data", None) or []:
            b64 = getattr(item, "b64_json", None)
            if b64:
                return EditOk(image_data=f"data:image/png;base64,{b64}")

            # Some models answer with a URL instead of inline data.
            url = getattr(item, "url", None)
            if url:
                try:
                    content = await asyncio.to_thread(_fetch_image, url)
                except requests.RequestException as e:
                    logger.warning("Could not download edited image: {!r}", e)
                    return GatewayError(f"Could not download edited image: {e}", e)
                return EditOk(image_data=encode(content))

        logger.info("Image edit response contained no image part")
        return EditAbsent()
