"""Recursive masking of sensitive data in nested Python values.

Strings anywhere inside dicts, lists and tuples are scanned against a set of
rules; each match is handed to the replace function of the first rule whose
pattern matches it.

Usage:
    from sensitive_masker import (
        mask_data,
        new_masker,
        with_custom_pattern,
        with_default_patterns,
    )

    mask_data({"card": "4111-1111-1111-1111"})
    # {"card": "4111********1111"}

    masker = new_masker(
        with_default_patterns(),
        with_custom_pattern("ticket", r"TCK-\\d+", lambda _: "TCK-***"),
    )
    masker.mask(["TCK-42", 7])
"""

from sensitive_masker.core.masking import (
    Masker,
    MaskingConfigError,
    RuleSet,
    mask_data,
    mask_data_typed,
    mask_string,
    new_masker,
)
from sensitive_masker.core.records import RecordConversionError, to_generic_map
from sensitive_masker.core.rules import (
    MASK_TOKEN,
    Config,
    Option,
    Rule,
    clean_number,
    default_config,
    default_patterns,
    extended_patterns,
    is_all_digits,
    token_pattern,
    with_custom_pattern,
    with_default_patterns,
    with_patterns,
    with_regex_list,
)

__all__ = [
    "MASK_TOKEN",
    "Config",
    "Masker",
    "MaskingConfigError",
    "Option",
    "RecordConversionError",
    "Rule",
    "RuleSet",
    "clean_number",
    "default_config",
    "default_patterns",
    "extended_patterns",
    "is_all_digits",
    "mask_data",
    "mask_data_typed",
    "mask_string",
    "new_masker",
    "to_generic_map",
    "token_pattern",
    "with_custom_pattern",
    "with_default_patterns",
    "with_patterns",
    "with_regex_list",
]
