"""Dependency detectors for component source files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Pattern, Sequence, Tuple, cast

from .base import DetectionRule, RuleBasedDetector

# Order is significant: it is the order dependencies are reported in.
DEFAULT_RULES: Tuple[DetectionRule, ...] = (
    DetectionRule(
        name="motion",
        packages=("framer-motion",),
        signatures=("framer-motion", 'from "framer-motion"', "motion."),
        modules=("framer-motion",),
        usages=(r"\bmotion\.[A-Za-z_$]",),
    ),
    DetectionRule(
        name="class-merge",
        packages=("clsx", "tailwind-merge"),
        signatures=("clsx", "cn("),
        modules=("clsx", "tailwind-merge"),
        usages=(r"(?<![\w$.])cn\(", r"(?<![\w$.])clsx\("),
    ),
    DetectionRule(
        name="icons",
        packages=("lucide-react",),
        signatures=("lucide-react",),
        modules=("lucide-react",),
    ),
    DetectionRule(
        name="spring",
        packages=("@react-spring/web",),
        signatures=("@react-spring",),
        modules=("@react-spring",),
    ),
    DetectionRule(
        name="measure",
        packages=("react-use-measure",),
        signatures=("react-use-measure",),
        modules=("react-use-measure",),
    ),
)

_TOKEN_RE = re.compile(
    r"""
    (?P<string>"(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*'|`(?:\\.|[^`\\])*`)
    |(?P<block>/\*.*?\*/)
    |(?P<line>//[^\n]*)
    """,
    re.VERBOSE | re.DOTALL,
)

_SPECIFIER_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"""\bimport\s+(?:[\w$*{}\s,]+?\s+from\s+)?["']([^"'\n]+)["']"""),
    re.compile(r"""\bexport\s+[\w$*{}\s,]+?\s+from\s+["']([^"'\n]+)["']"""),
    re.compile(r"""\brequire\(\s*["']([^"'\n]+)["']\s*\)"""),
    re.compile(r"""\bimport\(\s*["']([^"'\n]+)["']\s*\)"""),
)


class SubstringDetector(RuleBasedDetector):
    """Literal substring matching over the raw source.

    This is intentionally approximate: a signature inside a comment counts, a
    dynamically assembled module name does not.
    """

    name = "substring"

    def __init__(self, rules: Sequence[DetectionRule] = DEFAULT_RULES, **kwargs: str) -> None:
        super().__init__(rules, **kwargs)

    def matches(self, rule: DetectionRule, prepared: object) -> bool:
        source = str(prepared)
        return any(signature in source for signature in rule.signatures)


@dataclass(frozen=True)
class ScannedSource:
    """Comment-free view of a source file plus the module specifiers it imports."""

    code: str
    specifiers: FrozenSet[str]


class ImportDetector(RuleBasedDetector):
    """Syntax-aware detection driven by import statements and call sites.

    Comments are dropped before matching and string contents are ignored for
    usage patterns, which removes most false positives of the substring mode.
    """

    name = "imports"

    def __init__(self, rules: Sequence[DetectionRule] = DEFAULT_RULES, **kwargs: str) -> None:
        super().__init__(rules, **kwargs)
        self._usage_patterns = {
            rule.name: tuple(re.compile(pattern) for pattern in rule.usages) for rule in self.rules
        }

    def prepare(self, source: str) -> ScannedSource:
        return scan_source(source)

    def matches(self, rule: DetectionRule, prepared: object) -> bool:
        scanned = cast(ScannedSource, prepared)
        for specifier in scanned.specifiers:
            if any(_module_matches(specifier, module) for module in rule.modules):
                return True
        return any(pattern.search(scanned.code) for pattern in self._usage_patterns[rule.name])


def scan_source(source: str) -> ScannedSource:
    """Strip comments, collect import specifiers and blank out string literals."""
    without_comments = _TOKEN_RE.sub(_drop_comment, source)
    specifiers = {
        match.group(1)
        for pattern in _SPECIFIER_PATTERNS
        for match in pattern.finditer(without_comments)
    }
    code = _TOKEN_RE.sub(_blank_string, without_comments)
    return ScannedSource(code=code, specifiers=frozenset(specifiers))


def _module_matches(specifier: str, module: str) -> bool:
    module = module.rstrip("/")
    return specifier == module or specifier.startswith(f"{module}/")


def _drop_comment(match: re.Match[str]) -> str:
    if match.group("string") is not None:
        return match.group(0)
    # Keep line structure so positions in later passes stay meaningful.
    return "\n" * match.group(0).count("\n") or " "


def _blank_string(match: re.Match[str]) -> str:
    token = match.group(0)
    if match.group("string") is not None:
        return token[0] + token[-1]
    return token
