from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass

from sensitive_masker.core.rules import MASK_TOKEN

DEFAULT_MASKING_CATALOG = "default"
MASKING_CATALOGS = ("default", "extended", "none")
DEFAULT_MAX_PATTERN_LENGTH = 512


def _get_int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_choice_env(name: str, default: str, choices: tuple[str, ...]) -> str:
    value = os.getenv(name, "").strip().lower()
    if not value:
        return default
    if value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}; got {value!r}")
    return value


def _get_regex_list_env(name: str, max_length: int) -> list[str]:
    value = os.getenv(name, "")
    if not value.strip():
        return []
    try:
        items = json.loads(value)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{name} is not valid JSON: {exc}") from exc
    if not isinstance(items, list):
        raise ValueError(f"{name} must be a JSON array of regex strings")

    patterns: list[str] = []
    for idx, item in enumerate(items):
        if not isinstance(item, str):
            raise ValueError(f"{name}[{idx}] must be a string")
        pattern = item.strip()
        if not pattern:
            continue
        if len(pattern) > max_length:
            raise ValueError(f"{name}[{idx}] exceeds {max_length} characters")
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ValueError(f"{name}[{idx}] is not a valid regex: {exc}") from exc
        patterns.append(pattern)
    return patterns


@dataclass(frozen=True)
class Settings:
    masking_catalog: str
    masking_regex_list: list[str]
    masking_token: str
    masking_max_pattern_length: int


def load_settings() -> Settings:
    max_pattern_length = _get_int_env("MASKING_MAX_PATTERN_LENGTH", DEFAULT_MAX_PATTERN_LENGTH)
    return Settings(
        masking_catalog=_get_choice_env(
            "MASKING_CATALOG", DEFAULT_MASKING_CATALOG, MASKING_CATALOGS
        ),
        masking_regex_list=_get_regex_list_env("MASKING_REGEX_LIST_JSON", max_pattern_length),
        masking_token=os.getenv("MASKING_TOKEN", MASK_TOKEN),
        masking_max_pattern_length=max_pattern_length,
    )
