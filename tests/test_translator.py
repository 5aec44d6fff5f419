"""
Translator tests.

GoogleTranslator is exercised against an in-process fake session; no test
reaches the network.
"""

import asyncio

import aiohttp
import pytest

from config import get_settings_for_testing
from core.translator import GoogleTranslator, MockTranslator, create_translator
from exceptions import (
    ConfigurationError,
    MalformedTranslationError,
    TranslationError,
    TranslationServiceError,
    TranslationTimeoutError,
)


class FakeResponse:
    def __init__(self, status=200, payload=None, json_error=None):
        self.status = status
        self._payload = payload
        self._json_error = json_error

    async def json(self, content_type="application/json"):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class FakeRequest:
    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error

    async def __aenter__(self):
        if self._error is not None:
            raise self._error
        return self._response

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        return FakeRequest(self.response, self.error)


@pytest.fixture
def translator_settings():
    return get_settings_for_testing(translation_timeout_seconds=2.5)


class TestParseResponse:
    def test_joins_segments(self):
        payload = [[["I have fever. ", "मुझे बुखार है।", None], ["And cough", "और खांसी", None]], None, "hi"]
        assert GoogleTranslator.parse_response(payload) == "I have fever. And cough"

    @pytest.mark.parametrize("payload", [None, [], [None], {"a": 1}, [[[]]], [[["   "]]]])
    def test_malformed(self, payload):
        with pytest.raises(MalformedTranslationError):
            GoogleTranslator.parse_response(payload)


class TestGoogleTranslator:
    @pytest.mark.asyncio
    async def test_translate_sends_gtx_request(self, translator_settings):
        session = FakeSession(FakeResponse(payload=[[["I have fever", "मुझे बुखार है"]]]))
        translator = GoogleTranslator(settings=translator_settings, session=session)

        assert await translator.translate("मुझे बुखार है") == "I have fever"

        call = session.calls[0]
        assert call["url"] == translator_settings.translation_endpoint
        assert call["params"] == {
            "client": "gtx",
            "sl": "auto",
            "tl": "en",
            "dt": "t",
            "q": "मुझे बुखार है",
        }
        assert call["timeout"].total == 2.5

    @pytest.mark.asyncio
    async def test_timeout(self, translator_settings):
        session = FakeSession(error=asyncio.TimeoutError())
        translator = GoogleTranslator(settings=translator_settings, session=session)
        with pytest.raises(TranslationTimeoutError) as exc_info:
            await translator.translate("मुझे बुखार है")
        assert exc_info.value.details["timeout_seconds"] == 2.5

    @pytest.mark.asyncio
    async def test_connection_error(self, translator_settings):
        session = FakeSession(error=aiohttp.ClientConnectionError("refused"))
        translator = GoogleTranslator(settings=translator_settings, session=session)
        with pytest.raises(TranslationServiceError):
            await translator.translate("मुझे बुखार है")

    @pytest.mark.asyncio
    async def test_non_200(self, translator_settings):
        session = FakeSession(FakeResponse(status=503))
        translator = GoogleTranslator(settings=translator_settings, session=session)
        with pytest.raises(TranslationServiceError) as exc_info:
            await translator.translate("मुझे बुखार है")
        assert "HTTP 503" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_invalid_json(self, translator_settings):
        session = FakeSession(FakeResponse(json_error=ValueError("Expecting value")))
        translator = GoogleTranslator(settings=translator_settings, session=session)
        with pytest.raises(MalformedTranslationError):
            await translator.translate("मुझे बुखार है")


class TestMockTranslator:
    @pytest.mark.asyncio
    async def test_echo_and_fixed(self):
        assert await MockTranslator().translate("abc") == "abc"
        assert await MockTranslator(translation="fixed").translate("abc") == "fixed"

    @pytest.mark.asyncio
    async def test_failure_and_call_count(self):
        translator = MockTranslator(fail=MalformedTranslationError("bad"))
        with pytest.raises(TranslationError):
            await translator.translate("abc")
        assert translator.call_count == 1


def test_factory(translator_settings):
    assert isinstance(create_translator(use_mock=True), MockTranslator)
    assert isinstance(create_translator(settings=translator_settings), GoogleTranslator)


def test_endpoint_must_be_http():
    settings = get_settings_for_testing(translation_endpoint="translate.example.com")
    with pytest.raises(ConfigurationError) as exc_info:
        GoogleTranslator(settings=settings)
    assert exc_info.value.details["setting_name"] == "translation_endpoint"
