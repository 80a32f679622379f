from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache

from sensitive_masker.core.config import Settings, load_settings
from sensitive_masker.core.masking import Masker, new_masker
from sensitive_masker.core.rules import (
    Rule,
    default_patterns,
    extended_patterns,
    with_patterns,
    with_regex_list,
)

_CATALOGS: dict[str, Callable[[], list[Rule]]] = {
    "default": default_patterns,
    "extended": extended_patterns,
    "none": list,
}


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def build_masker(settings: Settings) -> Masker:
    return new_masker(
        with_patterns(_CATALOGS[settings.masking_catalog]()),
        with_regex_list(settings.masking_regex_list, settings.masking_token),
    )


@lru_cache
def get_masker() -> Masker:
    return build_masker(get_settings())
