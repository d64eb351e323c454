"""
Name-Formatting Rule Engine

Turns hierarchical variable paths ("color/brand/alpha/50") into target
identifiers ("color-brand-a50") using an ordered list of glob rules.

Glob syntax (path-segment aware, case-insensitive):
    *      one segment, captured            -> ([^/]+)
    **     everything including "/", captured -> (.+)
    /**/   zero or more whole segments between two literals
    **/    zero or more leading segments
    /**    zero or more trailing segments

Replacement templates:
    $1, ${1}              capture 1 verbatim
    $1:kebab, ${1:kebab}  capture 1 re-cased (kebab, snake, camel,
                          pascal, lower, upper)
    Missing captures substitute to "".

Rule evaluation is "first enabled match wins" over the authored order.
A computed default rule (pattern "**") is appended last; it is derived
from (prefix, casing) on every evaluation and never stored.
"""

from __future__ import annotations

import re
import warnings
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from vexport.model import Variable


DEFAULT_RULE_ID = "__default__"
DEFAULT_RULE_PATTERN = "**"

_REPLACEMENT_TOKEN_RE = re.compile(r"\$(?:\{(\d+)(?::(\w+))?\}|(\d+)(?::(\w+))?)")
_SEGMENT_SPLIT_RE = re.compile(r"[/\-_\s]+")


class Casing(Enum):
    """Casing conventions available to the default rule and to modifiers."""

    KEBAB = "kebab"
    SNAKE = "snake"
    CAMEL = "camel"
    PASCAL = "pascal"
    LOWER = "lower"
    UPPER = "upper"


class RuleWarning(UserWarning):
    """Emitted when a user-authored rule cannot be evaluated."""


@dataclass(frozen=True)
class NameFormatRule:
    """
    A user-authored glob -> template rule.

    Properties:
        pattern: Glob pattern, e.g. "color/*/alpha/*"
        replacement: Template, e.g. "color-$1-a$2"
        enabled: Disabled rules are skipped entirely
        id: Optional stable identifier (used by rule-list editors)
    """

    pattern: str
    replacement: str
    enabled: bool = True
    id: str = ""


@dataclass(frozen=True)
class RuleIssue:
    """A validation message for one rule; evaluation of others continues."""

    index: int
    pattern: str
    message: str


# =========================================================================
# PATTERN COMPILATION
# =========================================================================

def glob_to_regex(pattern: str) -> "re.Pattern[str]":
    """
    Compile a glob pattern into an anchored, case-insensitive regex.

    Example:
        glob_to_regex("color/*/alpha/*").match("color/brand/alpha/50")
        -> groups ("brand", "50")

    Raises:
        re.error: if the assembled expression does not compile
    """
    parts: List[str] = []
    i = 0
    n = len(pattern)

    while i < n:
        if pattern.startswith("/**/", i):
            parts.append("(?:/(.+))?/")
            i += 4
        elif i == 0 and pattern.startswith("**/"):
            parts.append("(?:(.+)/)?")
            i += 3
        elif pattern.startswith("/**", i) and i + 3 == n:
            parts.append("(?:/(.+))?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append("(.+)")
            i += 2
        elif pattern[i] == "*":
            parts.append("([^/]+)")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1

    return re.compile("^" + "".join(parts) + "$", re.IGNORECASE)


# =========================================================================
# REPLACEMENT TEMPLATES
# =========================================================================

def _capitalize(segment: str) -> str:
    if not segment:
        return segment
    return segment[0].upper() + segment[1:].lower()


def apply_casing(value: str, casing: Optional[str]) -> str:
    """
    Re-case a captured value.

    kebab/snake/camel/pascal split on "/", "-", "_" and whitespace and
    re-join with their own separator; lower/upper keep the separators.
    Unknown casings return the value unchanged.
    """
    if not value or not casing:
        return value

    segments = [s for s in _SEGMENT_SPLIT_RE.split(value) if s]
    casing = casing.lower()

    if casing == Casing.KEBAB.value:
        return "-".join(s.lower() for s in segments)
    if casing == Casing.SNAKE.value:
        return "_".join(s.lower() for s in segments)
    if casing == Casing.CAMEL.value:
        return "".join(
            s.lower() if i == 0 else _capitalize(s) for i, s in enumerate(segments)
        )
    if casing == Casing.PASCAL.value:
        return "".join(_capitalize(s) for s in segments)
    if casing == Casing.LOWER.value:
        return value.lower()
    if casing == Casing.UPPER.value:
        return value.upper()
    return value


def apply_replacement(template: str, captures: Sequence[Optional[str]]) -> str:
    """
    Instantiate a replacement template with regex captures.

    Example:
        apply_replacement("color-$1-a$2", ["brand", "50"]) -> "color-brand-a50"
        apply_replacement("${1:pascal}Text", ["color"])    -> "ColorText"
    """

    def substitute(match: "re.Match[str]") -> str:
        index = match.group(1) or match.group(3)
        modifier = match.group(2) or match.group(4)
        position = int(index) - 1
        value = ""
        if 0 <= position < len(captures):
            value = captures[position] or ""
        return apply_casing(value, modifier)

    return _REPLACEMENT_TOKEN_RE.sub(substitute, template)


# =========================================================================
# RULE EVALUATION
# =========================================================================

def to_custom_css_name(path: str, rules: Sequence[NameFormatRule]) -> Optional[str]:
    """
    Format a variable path with the first enabled matching rule.

    Rules are scanned in list order; specificity is irrelevant.
    A rule whose pattern fails to compile is skipped with a RuleWarning.

    Returns:
        The formatted name, or None if no rule matched
    """
    for index, rule in enumerate(rules):
        if not rule.enabled:
            continue

        try:
            regex = glob_to_regex(rule.pattern)
        except re.error as exc:
            warnings.warn(
                f"Skipping name format rule {index} ({rule.pattern!r}): {exc}",
                RuleWarning,
            )
            continue

        match = regex.match(path)
        if match:
            return apply_replacement(rule.replacement, match.groups())

    return None


def validate_rules(rules: Sequence[NameFormatRule]) -> List[RuleIssue]:
    """
    Check every rule and collect per-rule messages.

    Reports:
        - Empty patterns
        - Patterns that fail to compile
        - Replacement references to captures the pattern never produces
    """
    issues: List[RuleIssue] = []

    for index, rule in enumerate(rules):
        if not rule.pattern or not rule.pattern.strip():
            issues.append(RuleIssue(index, rule.pattern, "Pattern is empty"))
            continue

        try:
            regex = glob_to_regex(rule.pattern)
        except re.error as exc:
            issues.append(RuleIssue(index, rule.pattern, f"Invalid pattern: {exc}"))
            continue

        for match in _REPLACEMENT_TOKEN_RE.finditer(rule.replacement):
            ref = int(match.group(1) or match.group(3))
            if ref < 1 or ref > regex.groups:
                issues.append(RuleIssue(
                    index,
                    rule.pattern,
                    f"Replacement references ${ref} but pattern has {regex.groups} capture(s)",
                ))

    return issues


# =========================================================================
# DEFAULT RULE
# =========================================================================

def compute_default_replacement(prefix: str, casing: Casing) -> str:
    """
    Replacement template for the catch-all "**" rule.

    The prefix separator follows the casing convention:
        kebab   prefix-${1:kebab}
        snake   prefix_${1:snake}
        camel   prefix${1:pascal}
        pascal  Prefix${1:pascal}
        lower   prefix-${1:kebab}   (lower-cased prefix)
        upper   PREFIX_${1:snake}
    """
    casing = Casing(casing)
    if not prefix:
        return f"${{1:{casing.value}}}"

    if casing is Casing.KEBAB:
        return f"{prefix}-${{1:kebab}}"
    if casing is Casing.SNAKE:
        return f"{prefix}_${{1:snake}}"
    if casing is Casing.CAMEL:
        return f"{prefix}${{1:pascal}}"
    if casing is Casing.PASCAL:
        return f"{_capitalize(prefix)}${{1:pascal}}"
    if casing is Casing.LOWER:
        return f"{prefix.lower()}-${{1:kebab}}"
    return f"{prefix.upper()}_${{1:snake}}"


def create_default_rule(prefix: str, casing: Casing = Casing.KEBAB) -> NameFormatRule:
    return NameFormatRule(
        pattern=DEFAULT_RULE_PATTERN,
        replacement=compute_default_replacement(prefix, casing),
        enabled=True,
        id=DEFAULT_RULE_ID,
    )


def rules_with_default(
    custom_rules: Sequence[NameFormatRule],
    prefix: str = "",
    casing: Casing = Casing.KEBAB,
) -> List[NameFormatRule]:
    """User rules followed by a freshly computed default rule."""
    filtered = [r for r in custom_rules if r.id != DEFAULT_RULE_ID]
    return filtered + [create_default_rule(prefix, casing)]


# =========================================================================
# VARIABLE NAMES
# =========================================================================

def to_css_name(name: str) -> str:
    """
    Plain kebab-case CSS name for a variable path.

    "color/brandPrimary 2" -> "color-brand-primary-2"
    """
    if not name or not isinstance(name, str):
        return ""

    result = name.replace("/", "-")
    result = re.sub(r"\s+", "-", result)
    result = re.sub(r"([a-z])([A-Z])", r"\1-\2", result)
    result = re.sub(r"[^a-zA-Z0-9-]", "-", result)
    result = re.sub(r"-+", "-", result)
    return result.strip("-").lower()


def to_prefixed_name(css_name: str, prefix: str = "") -> str:
    if not prefix:
        return css_name
    return f"{prefix}-{css_name}"


def variable_css_name(
    variable: Variable,
    rules: Optional[Sequence[NameFormatRule]] = None,
    prefix: str = "",
) -> str:
    """
    Target identifier (without "--") for a variable.

    Order of precedence:
        1. code_syntax["WEB"], with any leading "--" stripped
        2. First matching name format rule
        3. Kebab-case path with optional prefix
    """
    web_name = variable.code_syntax.get("WEB") if variable.code_syntax else None
    if web_name:
        return web_name[2:] if web_name.startswith("--") else web_name

    if rules:
        custom = to_custom_css_name(variable.name, rules)
        if custom:
            return custom

    return to_prefixed_name(to_css_name(variable.name), prefix)
