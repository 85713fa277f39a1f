# tests/test_languages.py

from storyhub.languages import SUPPORTED_LANGUAGES, DEFAULT_LANGUAGE, is_supported, language_name

def test_default_language_supported():
    assert is_supported(DEFAULT_LANGUAGE)

def test_south_african_languages():
    for code in ("af", "nso", "st", "tn", "ve", "ts", "zu", "xh"):
        assert is_supported(code), code

def test_language_name():
    assert language_name("zu") == "Zulu"
    assert language_name("xx") is None
    assert len(SUPPORTED_LANGUAGES) == 12
