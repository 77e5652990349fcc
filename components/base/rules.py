"""
Declarative keyword rules.

Keyword detection across the engine (design-type keywords, scenario
inference, safety signals, the risk table) is expressed as ordered tables of
`Rule` objects evaluated by two generic functions:

- first_match(): first rule whose pattern matches wins (ordered lookup)
- all_matches(): every matching rule contributes (additive lookup)

Patterns use case-insensitive substring containment, which is what the
facility procedures' keyword lists were written against.
"""

from dataclasses import dataclass
from typing import Any, Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


def normalize_text(*parts: Optional[str]) -> str:
    """Join text fragments with a space and lowercase the result."""
    return " ".join(p for p in parts if p).lower()


def keywords_present(text: str, keywords: Iterable[str]) -> List[str]:
    """Return the keywords contained in text, preserving keyword order."""
    lowered = (text or "").lower()
    return [kw for kw in keywords if kw in lowered]


class KeywordPattern:
    """
    Conjunction of keyword groups.

    Each group matches when any of its keywords is a substring of the text;
    the pattern matches when every group matches.

    Usage:
        KeywordPattern(["valve"], ["replace", "different manufacturer"])
        KeywordPattern.any_of("install new", "new installation")
    """

    def __init__(self, *groups: Iterable[str]):
        self.groups: Tuple[Tuple[str, ...], ...] = tuple(
            tuple(kw.lower() for kw in group) for group in groups
        )

    @classmethod
    def any_of(cls, *keywords: str) -> "KeywordPattern":
        return cls(keywords)

    def matches(self, text: Any) -> bool:
        lowered = (text or "").lower()
        return all(any(kw in lowered for kw in group) for group in self.groups)

    def __or__(self, other: "KeywordPattern") -> "EitherPattern":
        return EitherPattern(self, other)

    def __repr__(self) -> str:
        return f"KeywordPattern({' & '.join('|'.join(g) for g in self.groups)})"


class EitherPattern:
    """Disjunction of patterns; matches when any member pattern matches."""

    def __init__(self, *patterns):
        self.patterns = tuple(patterns)

    def matches(self, text: Any) -> bool:
        return any(p.matches(text) for p in self.patterns)

    def __or__(self, other) -> "EitherPattern":
        return EitherPattern(*self.patterns, other)

    def __repr__(self) -> str:
        return " | ".join(repr(p) for p in self.patterns)


@dataclass(frozen=True)
class Rule(Generic[T]):
    """A pattern paired with the result it produces when it matches."""

    pattern: Any
    result: T
    name: str = ""

    def matches(self, subject: Any) -> bool:
        return self.pattern.matches(subject)


def first_match(rules: Sequence[Rule[T]], subject: Any, default: Optional[T] = None) -> Optional[T]:
    """Return the result of the first matching rule, or default."""
    for rule in rules:
        if rule.matches(subject):
            return rule.result
    return default


def all_matches(rules: Sequence[Rule[T]], subject: Any) -> List[Rule[T]]:
    """Return every matching rule in table order."""
    return [rule for rule in rules if rule.matches(subject)]
