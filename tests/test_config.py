from __future__ import annotations

import pytest

from sensitive_masker.core.config import DEFAULT_MAX_PATTERN_LENGTH, load_settings
from sensitive_masker.core.rules import MASK_TOKEN


@pytest.fixture(autouse=True)
def _clear_masking_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "MASKING_CATALOG",
        "MASKING_REGEX_LIST_JSON",
        "MASKING_TOKEN",
        "MASKING_MAX_PATTERN_LENGTH",
    ):
        monkeypatch.delenv(name, raising=False)


def test_load_settings_defaults() -> None:
    settings = load_settings()

    assert settings.masking_catalog == "default"
    assert settings.masking_regex_list == []
    assert settings.masking_token == MASK_TOKEN
    assert settings.masking_max_pattern_length == DEFAULT_MAX_PATTERN_LENGTH


def test_load_settings_parses_masking_regex_list_json(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(
        "MASKING_REGEX_LIST_JSON",
        '["token-\\\\d+", "secret-[A-Za-z]+", "  "]',
    )

    settings = load_settings()

    assert settings.masking_regex_list == [r"token-\d+", "secret-[A-Za-z]+"]


def test_load_settings_rejects_non_array_masking_regex_json(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("MASKING_REGEX_LIST_JSON", '{"regex": "token-\\\\d+"}')

    with pytest.raises(ValueError, match="MASKING_REGEX_LIST_JSON"):
        load_settings()


def test_load_settings_rejects_malformed_masking_regex_json(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("MASKING_REGEX_LIST_JSON", "[unquoted")

    with pytest.raises(ValueError, match="MASKING_REGEX_LIST_JSON is not valid JSON"):
        load_settings()


def test_load_settings_rejects_non_string_masking_regex_item(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("MASKING_REGEX_LIST_JSON", '["token-\\\\d+", 1]')

    with pytest.raises(ValueError, match="MASKING_REGEX_LIST_JSON\\[1\\]"):
        load_settings()


def test_load_settings_rejects_invalid_regex_pattern(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MASKING_REGEX_LIST_JSON", r'["(unclosed"]')

    with pytest.raises(ValueError, match="MASKING_REGEX_LIST_JSON\\[0\\]"):
        load_settings()


def test_load_settings_rejects_overlong_regex_pattern(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MASKING_MAX_PATTERN_LENGTH", "8")
    monkeypatch.setenv("MASKING_REGEX_LIST_JSON", '["short", "far-too-long-pattern"]')

    with pytest.raises(ValueError, match="MASKING_REGEX_LIST_JSON\\[1\\] exceeds 8"):
        load_settings()


def test_load_settings_ignores_unparsable_max_pattern_length(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("MASKING_MAX_PATTERN_LENGTH", "lots")

    assert load_settings().masking_max_pattern_length == DEFAULT_MAX_PATTERN_LENGTH


def test_load_settings_reads_catalog_and_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MASKING_CATALOG", " Extended ")
    monkeypatch.setenv("MASKING_TOKEN", "<redacted>")

    settings = load_settings()

    assert settings.masking_catalog == "extended"
    assert settings.masking_token == "<redacted>"


def test_load_settings_rejects_unknown_catalog(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MASKING_CATALOG", "everything")

    with pytest.raises(ValueError, match="MASKING_CATALOG"):
        load_settings()
