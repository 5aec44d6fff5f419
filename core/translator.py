"""
Translation Service for ConsultScribe
=====================================

Best-effort translation of Hindi transcripts to English so the English
extraction tables can run over them.

Architecture Pattern: Protocol-based Service
--------------------------------------------
The pipeline only depends on TranslatorProtocol. Implementations:
- GoogleTranslator: free translate endpoint over aiohttp
- MockTranslator: deterministic stand-in for tests and offline use

Failure Policy
--------------
Implementations raise a TranslationError subclass on any failure. The
pipeline catches it and continues with the original transcript, so a
translation outage never blocks note assembly.
"""

import asyncio
import logging
from typing import Optional, Protocol

import aiohttp

from config import Settings, get_settings
from exceptions import (
    ConfigurationError,
    MalformedTranslationError,
    TranslationServiceError,
    TranslationTimeoutError,
)


# Set up module logger
logger = logging.getLogger(__name__)


class TranslatorProtocol(Protocol):
    """Interface for transcript translators."""

    async def translate(self, text: str) -> str:
        """
        Translate text to the configured target language.

        Raises:
            TranslationError: on network error, timeout or malformed response
        """
        ...


class GoogleTranslator:
    """
    Translator backed by the free Google translate endpoint (gtx client).

    The endpoint answers with a nested JSON array whose first element is a
    list of segments; each segment's first element is translated text.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Args:
            settings: Application settings (uses defaults if not provided)
            session: Optional shared aiohttp session. When omitted a session
                     is opened per call, which keeps concurrent consultations
                     fully independent.
        """
        self.settings = settings or get_settings()
        self._session = session

        if not self.settings.translation_endpoint.startswith(("http://", "https://")):
            raise ConfigurationError(
                setting_name="translation_endpoint",
                issue=f"expected an http(s) URL, got '{self.settings.translation_endpoint}'"
            )

        logger.info(
            f"GoogleTranslator initialized "
            f"(target: {self.settings.translation_target_language}, "
            f"timeout: {self.settings.translation_timeout_seconds}s)"
        )

    async def translate(self, text: str) -> str:
        endpoint = self.settings.translation_endpoint
        params = {
            "client": "gtx",
            "sl": "auto",
            "tl": self.settings.translation_target_language,
            "dt": "t",
            "q": text,
        }
        timeout = aiohttp.ClientTimeout(total=self.settings.translation_timeout_seconds)

        logger.debug(f"Requesting translation ({len(text)} chars)")

        try:
            if self._session is not None:
                payload = await self._fetch(self._session, endpoint, params, timeout)
            else:
                async with aiohttp.ClientSession() as session:
                    payload = await self._fetch(session, endpoint, params, timeout)
        except asyncio.TimeoutError:
            raise TranslationTimeoutError(
                endpoint=endpoint,
                timeout_seconds=self.settings.translation_timeout_seconds
            )
        except aiohttp.ClientError as e:
            raise TranslationServiceError(endpoint=endpoint, original_error=str(e))

        translated = self.parse_response(payload)
        logger.debug(f"Translation received ({len(translated)} chars)")
        return translated

    async def _fetch(self, session, endpoint, params, timeout):
        async with session.get(endpoint, params=params, timeout=timeout) as response:
            if response.status != 200:
                raise TranslationServiceError(
                    endpoint=endpoint,
                    original_error=f"HTTP {response.status}"
                )
            try:
                return await response.json(content_type=None)
            except ValueError as e:
                raise MalformedTranslationError(f"invalid JSON: {e}")

    @staticmethod
    def parse_response(payload) -> str:
        """
        Join the translated segments of a gtx response.

        Example payload: [[["I have fever", "मुझे बुखार है", None, None, 10]], None, "hi"]
        """
        try:
            segments = payload[0]
            translated = "".join(segment[0] for segment in segments if segment and segment[0])
        except (TypeError, IndexError, KeyError) as e:
            raise MalformedTranslationError(str(e))

        if not translated.strip():
            raise MalformedTranslationError("empty translation")
        return translated


class MockTranslator:
    """
    Mock translator for testing.

    Returns a fixed translation when one is given, otherwise echoes the input.
    Set `fail` to make every call raise the given TranslationError.
    """

    def __init__(self, translation: Optional[str] = None, fail: Optional[Exception] = None):
        self.translation = translation
        self.fail = fail
        self.call_count = 0

    async def translate(self, text: str) -> str:
        self.call_count += 1
        if self.fail is not None:
            raise self.fail
        return self.translation if self.translation is not None else text


# =============================================================================
# Factory Function
# =============================================================================

def create_translator(
    settings: Optional[Settings] = None,
    use_mock: bool = False,
    mock_translation: Optional[str] = None
) -> TranslatorProtocol:
    """
    Factory function to create the appropriate translator.

    Args:
        settings: Application settings
        use_mock: If True, returns a mock translator
        mock_translation: Fixed text returned by the mock translator

    Returns:
        A translator instance
    """
    if use_mock:
        logger.info("Creating mock translator")
        return MockTranslator(translation=mock_translation)

    logger.info("Creating Google translator")
    return GoogleTranslator(settings=settings)
