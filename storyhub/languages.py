# storyhub/languages.py
from typing import Optional

DEFAULT_LANGUAGE = "en"

SUPPORTED_LANGUAGES = {
    "en": "English",
    "af": "Afrikaans",
    "nso": "Sepedi",
    "st": "Sesotho",
    "tn": "Setswana",
    "ve": "Venda",
    "ts": "Tsonga",
    "zu": "Zulu",
    "xh": "Xhosa",
    "pt": "Portuguese",
    "fr": "French",
    "zh": "Chinese (Mandarin)",
}


def is_supported(code: str) -> bool:
    return code in SUPPORTED_LANGUAGES


def language_name(code: str) -> Optional[str]:
    """Human readable name for a language code, None if unknown"""
    return SUPPORTED_LANGUAGES.get(code)
