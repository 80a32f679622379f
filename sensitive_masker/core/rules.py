from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

MASK_TOKEN = "[MASKED]"

CREDIT_CARD_REGEX = r"\b(?:\d[ -]*?){13,16}\d\b"
EMAIL_REGEX = r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b"
CPF_REGEX = r"\b\d{3}\.?\d{3}\.?\d{3}-?\d{2}\b"
CNPJ_REGEX = r"\b\d{2}\.?\d{3}\.?\d{3}/?\d{4}-?\d{2}\b"
PHONE_REGEX = r"(?:\+?55\s?)?(?:\(?\d{2}\)?[\s-]?)?\d{4,5}[\s-]?\d{4}"

_NUMBER_SEPARATORS = str.maketrans("", "", " -./()")


@dataclass(frozen=True)
class Rule:
    """A named sensitive-data shape and how to redact a match of it.

    Attributes:
        name: Informational label, not required to be unique.
        pattern: Regular expression source. An empty pattern never matches.
        replace: Called with the matched text; returns its replacement.
            ``None`` leaves matches of this rule untouched.
    """

    name: str
    pattern: str
    replace: Callable[[str], str] | None = None


@dataclass
class Config:
    patterns: list[Rule] = field(default_factory=list)


Option = Callable[[Config], None]


def with_patterns(patterns: Iterable[Rule]) -> Option:
    """Replace the whole rule list."""
    rules = list(patterns)

    def apply(config: Config) -> None:
        config.patterns = list(rules)

    return apply


def with_custom_pattern(
    name: str, pattern: str, replace: Callable[[str], str] | None = None
) -> Option:
    """Append a single rule after the ones already configured."""

    def apply(config: Config) -> None:
        config.patterns.append(Rule(name=name, pattern=pattern, replace=replace))

    return apply


def with_default_patterns() -> Option:
    def apply(config: Config) -> None:
        config.patterns.extend(default_patterns())

    return apply


def with_regex_list(patterns: Iterable[str], token: str = MASK_TOKEN) -> Option:
    """Append one rule per regex, each replacing its matches with ``token``."""
    rules = [
        token_pattern(f"regex_{idx}", pattern, token) for idx, pattern in enumerate(patterns)
    ]

    def apply(config: Config) -> None:
        config.patterns.extend(rules)

    return apply


def default_config() -> Config:
    return Config(patterns=default_patterns())


def default_patterns() -> list[Rule]:
    return [Rule(name="credit_card", pattern=CREDIT_CARD_REGEX, replace=mask_credit_card)]


def extended_patterns() -> list[Rule]:
    """Credit card, e-mail, and Brazilian CPF, CNPJ and phone numbers."""
    return [
        Rule(name="credit_card", pattern=CREDIT_CARD_REGEX, replace=mask_credit_card),
        Rule(name="email", pattern=EMAIL_REGEX, replace=mask_email),
        Rule(name="cpf", pattern=CPF_REGEX, replace=mask_cpf),
        Rule(name="cnpj", pattern=CNPJ_REGEX, replace=mask_cnpj),
        Rule(name="phone", pattern=PHONE_REGEX, replace=mask_phone),
    ]


def token_pattern(name: str, pattern: str, token: str = MASK_TOKEN) -> Rule:
    return Rule(name=name, pattern=pattern, replace=lambda _: token)


def mask_credit_card(card: str) -> str:
    digits = clean_number(card)
    if len(digits) == 16 and is_all_digits(digits):
        return digits[:4] + "********" + digits[12:]
    return card


def mask_email(email: str) -> str:
    parts = email.split("@")
    if len(parts) != 2:
        return email
    username, domain = parts
    if len(username) > 2:
        return username[:2] + "***@" + domain
    return "***@" + domain


def mask_cpf(cpf: str) -> str:
    digits = clean_number(cpf)
    if len(digits) == 11 and is_all_digits(digits):
        return digits[:3] + "***.***-" + digits[9:]
    return cpf


def mask_cnpj(cnpj: str) -> str:
    digits = clean_number(cnpj)
    if len(digits) == 14 and is_all_digits(digits):
        return digits[:2] + "***.***/****-" + digits[12:]
    return cnpj


def mask_phone(phone: str) -> str:
    digits = clean_number(phone)
    if 10 <= len(digits) <= 11 and is_all_digits(digits):
        return digits[:4] + "****" + digits[8:]
    return phone


def clean_number(value: str) -> str:
    """Strip spaces, dashes, dots, slashes and parentheses."""
    return value.translate(_NUMBER_SEPARATORS)


def is_all_digits(value: str) -> bool:
    # str.isdigit() also accepts non-ASCII digits
    return all("0" <= char <= "9" for char in value)
