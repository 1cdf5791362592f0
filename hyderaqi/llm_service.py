"""
LLM service module for the HyderAQI dashboard core.

This module contains the LLMService class, the single gateway to the remote
inference service (Google Gemini via the google-genai SDK). Supports two modes:
- "mock": No remote calls. Callers produce deterministic offline output.
- "gemini": Structured JSON generation, optionally grounded with Google Search.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from google import genai
from google.genai import types

from .config import LLM_MODES, Settings
from .exceptions import InferenceError, ResponseFormatError, ServiceUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class StructuredResponse:
    """
    Decoded result of a structured generation call.

    Attributes:
        payload: The JSON object returned by the model
        source_urls: Grounding source URLs in the order the service listed them
    """

    payload: dict[str, Any]
    source_urls: list[str] = field(default_factory=list)


def extract_source_urls(response: Any) -> list[str]:
    """
    Collects web source URIs from the grounding metadata of a response.

    Only the first candidate is inspected. Chunks without a web URI are
    skipped; duplicates are kept and order is preserved.

    Args:
        response: A GenerateContentResponse (or an object shaped like one)

    Returns:
        List of URL strings, possibly empty
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    urls = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        if uri:
            urls.append(uri)
    return urls


class LLMService:
    """
    Gateway to the Gemini API for structured, optionally grounded, generation.

    Mode is selected via the constructor, then HYDERAQI_LLM_MODE, then defaults
    to "mock". If "gemini" is requested but no API key is configured or the
    client cannot be created, the service falls back to "mock" and logs a
    warning. Failures of individual calls are never hidden: they raise.
    """

    def __init__(
        self,
        mode: Optional[str] = None,
        settings: Optional[Settings] = None,
        client: Any = None,
    ):
        """
        Initialize LLMService.

        Args:
            mode: Optional mode override ("mock" or "gemini")
            settings: Configuration; read from the environment if None
            client: Pre-built genai client (used as-is, mainly for tests)
        """
        self.settings = settings or Settings.from_env()
        requested = (mode or self.settings.llm_mode or "mock").lower()
        self.mode = requested if requested in LLM_MODES else "mock"
        self.model = self.settings.model

        self._client = client
        if self.mode == "gemini" and self._client is None:
            self._client = self._init_gemini_client()
            if self._client is None:
                self.mode = "mock"
                logger.warning("Gemini mode requested but unavailable, falling back to mock mode")

    def _init_gemini_client(self):
        """
        Creates the genai client.

        Returns:
            genai.Client if the API key is present and the client builds, None otherwise
        """
        if not self.settings.api_key:
            logger.warning("GEMINI_API_KEY not found, Gemini mode unavailable")
            return None

        try:
            return genai.Client(api_key=self.settings.api_key)
        except Exception as e:
            logger.warning("Failed to initialize Gemini client: %s", e)
            return None

    @property
    def is_live(self) -> bool:
        return self.mode == "gemini" and self._client is not None

    async def generate_structured(
        self,
        prompt: str,
        schema: types.Schema,
        grounded: bool = False,
    ) -> StructuredResponse:
        """
        Asks the model for a JSON object conforming to ``schema``.

        Args:
            prompt: The natural-language prompt
            schema: Response schema the output must follow
            grounded: If True, enable Google Search grounding

        Returns:
            StructuredResponse with the decoded object and grounding URLs

        Raises:
            ServiceUnavailableError: In mock mode
            InferenceError: If the API call fails
            ResponseFormatError: If the response text is empty or not a JSON object
        """
        if not self.is_live:
            raise ServiceUnavailableError("LLM service is running in mock mode")

        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=schema,
            tools=[types.Tool(google_search=types.GoogleSearch())] if grounded else None,
        )

        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            raise InferenceError(f"Gemini API call failed: {e}") from e

        payload = self._parse_json_object(getattr(response, "text", None))
        return StructuredResponse(payload=payload, source_urls=extract_source_urls(response))

    def _parse_json_object(self, text: Optional[str]) -> dict[str, Any]:
        """
        Decodes the response text into a dict.

        Models sometimes wrap JSON in a markdown fence; the fence is stripped
        before decoding.
        """
        if not text or not text.strip():
            raise ResponseFormatError("Gemini returned an empty response")

        cleaned = text.strip()
        if cleaned.startswith("```"):
            cleaned = cleaned.strip("`")
            if cleaned.lower().startswith("json"):
                cleaned = cleaned[4:]

        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise ResponseFormatError(f"Gemini returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ResponseFormatError("Gemini returned JSON that is not an object")
        return data
