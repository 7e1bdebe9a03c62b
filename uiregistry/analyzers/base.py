"""Base classes for dependency detector plugins."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence, Tuple

DEFAULT_DEPENDENCY = "framer-motion"


@dataclass(frozen=True)
class DetectionRule:
    """Maps a textual signature of a component to the packages it needs."""

    name: str
    packages: Tuple[str, ...]
    signatures: Tuple[str, ...] = ()
    modules: Tuple[str, ...] = ()
    usages: Tuple[str, ...] = ()


class DependencyDetector(ABC):
    """Contract for detectors that infer runtime dependencies from source text."""

    name: str = "detector"

    @abstractmethod
    def detect(self, source: str) -> List[str]:
        """Return the ordered, duplicate-free dependency list for ``source``."""


class RuleBasedDetector(DependencyDetector):
    """Evaluates every rule independently and merges their contributions."""

    def __init__(
        self,
        rules: Sequence[DetectionRule],
        *,
        default: str = DEFAULT_DEPENDENCY,
    ) -> None:
        self.rules = tuple(rules)
        self.default = default

    def detect(self, source: str) -> List[str]:
        prepared = self.prepare(source)
        found: List[str] = []
        for rule in self.rules:
            if self.matches(rule, prepared):
                found.extend(rule.packages)
        if not found:
            found.append(self.default)
        return list(dict.fromkeys(found))

    def prepare(self, source: str) -> object:
        return source

    @abstractmethod
    def matches(self, rule: DetectionRule, prepared: object) -> bool:
        """Return True when ``rule`` fires for the prepared source."""
