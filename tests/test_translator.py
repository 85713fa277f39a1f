# tests/test_translator.py

import pytest
import requests
from unittest.mock import Mock
from storyhub.errors import TranslationUnavailable, ValidationFailed
from storyhub.services.translator import GoogleTranslator

def _response(payload):
    response = Mock()
    response.raise_for_status.return_value = None
    response.json.return_value = payload
    return response

@pytest.fixture
def http():
    """Mock requests session."""
    return Mock(spec=requests.Session)

@pytest.fixture
def translator(http):
    return GoogleTranslator(api_key="test-key", timeout=2.5, http=http)

def test_translate(translator, http):
    http.post.return_value = _response({"data": {"translations": [{"translatedText": "Bonjour"}]}})

    assert translator.translate("Hello", "fr") == "Bonjour"
    http.post.assert_called_once_with(
        GoogleTranslator.ENDPOINT,
        params={"key": "test-key"},
        json={"q": "Hello", "target": "fr", "format": "text"},
        timeout=2.5,
    )

def test_translator_is_callable(translator, http):
    http.post.return_value = _response({"data": {"translations": [{"translatedText": "Sawubona"}]}})
    assert translator("Hello", "zu") == "Sawubona"

def test_missing_api_key(http, monkeypatch):
    monkeypatch.delenv("GOOGLE_TRANSLATE_API_KEY", raising=False)
    with pytest.raises(TranslationUnavailable, match="not configured"):
        GoogleTranslator(http=http).translate("Hello", "fr")
    http.post.assert_not_called()

def test_settings_from_environment(http, monkeypatch):
    monkeypatch.setenv("GOOGLE_TRANSLATE_API_KEY", "env-key")
    monkeypatch.setenv("TRANSLATION_TIMEOUT", "4")
    translator = GoogleTranslator(http=http)
    assert translator.api_key == "env-key"
    assert translator.timeout == 4.0

def test_unsupported_language(translator, http):
    with pytest.raises(ValidationFailed, match="Unsupported target language"):
        translator.translate("Hello", "xx")
    http.post.assert_not_called()

def test_timeout(translator, http):
    http.post.side_effect = requests.Timeout("slow")
    with pytest.raises(TranslationUnavailable, match="timed out after 2.5s"):
        translator.translate("Hello", "fr")

def test_http_error(translator, http):
    response = Mock()
    response.raise_for_status.side_effect = requests.HTTPError("403 Forbidden")
    http.post.return_value = response
    with pytest.raises(TranslationUnavailable, match="Translation failed"):
        translator.translate("Hello", "fr")

def test_connection_error(translator, http):
    http.post.side_effect = requests.ConnectionError("unreachable")
    with pytest.raises(TranslationUnavailable):
        translator.translate("Hello", "fr")

def test_unexpected_body(translator, http):
    http.post.return_value = _response({"error": "nope"})
    with pytest.raises(TranslationUnavailable, match="Unexpected"):
        translator.translate("Hello", "fr")
