# storyhub/services/translator.py
import logging
import os
from typing import Callable, Optional

import requests

from storyhub.errors import TranslationUnavailable, ValidationFailed
from storyhub.languages import is_supported

logger = logging.getLogger(__name__)

# (text, target_language_code) -> translated text
TranslateFn = Callable[[str, str], str]

DEFAULT_TIMEOUT = 10.0


class GoogleTranslator:
    """Client for the Google Cloud Translation v2 REST endpoint.

    Instances are callable with the TranslateFn signature so they can be handed
    straight to TranslationRepository.get_or_create_translation.
    """

    ENDPOINT = "https://translation.googleapis.com/language/translate/v2"

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None,
                 http: Optional[requests.Session] = None):
        self.api_key = api_key or os.getenv("GOOGLE_TRANSLATE_API_KEY")
        self.timeout = timeout if timeout is not None else float(os.getenv("TRANSLATION_TIMEOUT", DEFAULT_TIMEOUT))
        self.http = http or requests.Session()

    def translate(self, text: str, target_language: str) -> str:
        """Translate text into the target language.

        Args:
            text: Source text
            target_language: Target language code, e.g. "fr"

        Returns:
            The translated text

        Raises:
            ValidationFailed: If the target language is not supported
            TranslationUnavailable: If no API key is configured, the request
                fails or times out, or the response cannot be read
        """
        if not is_supported(target_language):
            raise ValidationFailed(f"Unsupported target language '{target_language}'")
        if not self.api_key:
            raise TranslationUnavailable("Google Translate API key not configured")

        try:
            response = self.http.post(
                self.ENDPOINT,
                params={"key": self.api_key},
                json={"q": text, "target": target_language, "format": "text"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.Timeout as e:
            logger.warning("Translation to %s timed out after %ss", target_language, self.timeout)
            raise TranslationUnavailable(f"Translation timed out after {self.timeout}s") from e
        except (requests.RequestException, ValueError) as e:
            logger.warning("Translation to %s failed: %s", target_language, e)
            raise TranslationUnavailable(f"Translation failed: {e}") from e

        try:
            return payload["data"]["translations"][0]["translatedText"]
        except (KeyError, IndexError, TypeError) as e:
            raise TranslationUnavailable("Unexpected translation response shape") from e

    __call__ = translate
