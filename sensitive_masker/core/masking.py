from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from re import Match, Pattern
from typing import Any

from sensitive_masker.core.records import RecordConversionError, to_generic_map
from sensitive_masker.core.rules import Config, Option, Rule, default_config

logger = logging.getLogger(__name__)

# Escaped backslash, a numbered backreference, or a numbered group conditional.
_NUMBERED_GROUP_REF = re.compile(r"\\\\|\\([1-9])|\(\?\((\d+)\)")


class MaskingConfigError(ValueError):
    """Raised when a rule set cannot be compiled."""


def _uses_numbered_group_ref(pattern: str) -> bool:
    for match in _NUMBERED_GROUP_REF.finditer(pattern):
        if match.group(1) or match.group(2):
            return True
    return False


@dataclass(frozen=True)
class RuleSet:
    rules: tuple[Rule, ...] = field(default_factory=tuple)
    matchers: tuple[tuple[Rule, Pattern[str]], ...] = field(default_factory=tuple)
    combined: Pattern[str] | None = None

    @classmethod
    def compile(cls, rules: Iterable[Rule]) -> RuleSet:
        """Compile every non-empty rule pattern plus their alternation.

        Rules with an empty pattern are kept in ``rules`` but never take part
        in matching or dispatch. A pattern that refers to a group by number is
        rejected when an earlier pattern defines groups, since joining them
        would shift its group numbers.
        """
        all_rules = tuple(rules)
        matchers: list[tuple[Rule, Pattern[str]]] = []
        groups_before = 0
        for idx, rule in enumerate(all_rules):
            if not rule.pattern:
                continue
            try:
                compiled = re.compile(rule.pattern)
            except re.error as exc:
                raise MaskingConfigError(
                    f"invalid masking regex at index {idx}: {rule.pattern}"
                ) from exc
            if groups_before and _uses_numbered_group_ref(rule.pattern):
                raise MaskingConfigError(
                    f"masking regex at index {idx} uses a numbered group reference "
                    f"after patterns with capture groups; use a named group: {rule.pattern}"
                )
            groups_before += compiled.groups
            matchers.append((rule, compiled))

        combined: Pattern[str] | None = None
        if matchers:
            source = "|".join(rule.pattern for rule, _ in matchers)
            try:
                combined = re.compile(source)
            except re.error as exc:
                raise MaskingConfigError(f"invalid combined masking regex: {source}") from exc
            logger.debug("Compiled %d masking rules (%d matchable)", len(all_rules), len(matchers))
        else:
            logger.debug("No masking rule has a pattern; masking is disabled")

        return cls(rules=all_rules, matchers=tuple(matchers), combined=combined)

    @property
    def active(self) -> bool:
        return self.combined is not None

    def rule_for(self, matched: str) -> Rule | None:
        """Return the first declared rule with a replace function whose own pattern matches."""
        for rule, pattern in self.matchers:
            if rule.replace is not None and pattern.search(matched):
                return rule
        return None


@dataclass(frozen=True)
class Masker:
    rule_set: RuleSet = field(default_factory=RuleSet)

    @classmethod
    def from_rules(cls, rules: Iterable[Rule]) -> Masker:
        return cls(rule_set=RuleSet.compile(rules))

    def mask(self, value: Any) -> Any:
        """Return a masked copy of ``value``; the input is never modified.

        Subclasses of ``list``, ``tuple`` and ``dict`` (``OrderedDict``,
        ``defaultdict``, named tuples) come back as the plain builtin type.
        """
        if isinstance(value, str):
            return self.mask_text(value)
        if isinstance(value, list):
            return [self.mask(item) for item in value]
        if isinstance(value, tuple):
            return tuple(self.mask(item) for item in value)
        if isinstance(value, dict):
            return {key: self.mask(item) for key, item in value.items()}
        return value

    def mask_typed(self, record: Any, *, strict: bool = False) -> dict[str, Any]:
        """Flatten a typed record into a ``dict`` and mask each of its values.

        A record that cannot be converted yields ``{}`` unless ``strict`` is
        set, in which case the ``RecordConversionError`` propagates.
        """
        try:
            data = to_generic_map(record)
        except RecordConversionError as exc:
            if strict:
                raise
            logger.warning("Failed to convert record for masking: %s", exc)
            return {}
        return {key: self.mask(item) for key, item in data.items()}

    def mask_string(self, text: str) -> str:
        result = self.mask(text)
        if isinstance(result, str):
            return result
        return text

    def mask_text(self, text: str) -> str:
        combined = self.rule_set.combined
        if combined is None or not text:
            return text
        return combined.sub(self._replace_match, text)

    def _replace_match(self, match: Match[str]) -> str:
        matched = match.group(0)
        rule = self.rule_set.rule_for(matched)
        if rule is None or rule.replace is None:
            return matched
        return rule.replace(matched)


def new_masker(*options: Option) -> Masker:
    """Build a masker from ``options``, or from the default catalog when none are given.

    Options are applied in order to an empty configuration, so
    ``with_custom_pattern`` alone yields a masker with just that rule; add
    ``with_default_patterns()`` first to keep the defaults.
    """
    if options:
        config = Config()
        for option in options:
            option(config)
    else:
        config = default_config()
    return Masker.from_rules(config.patterns)


def mask_data(data: Any, *options: Option) -> Any:
    return new_masker(*options).mask(data)


def mask_data_typed(record: Any, *options: Option) -> dict[str, Any]:
    return new_masker(*options).mask_typed(record)


def mask_string(text: str, *options: Option) -> str:
    return new_masker(*options).mask_string(text)
