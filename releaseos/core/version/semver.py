"""Semantic version values and the bump-kind lattice.

This module provides:
- BumpKind: NONE < PATCH < MINOR < MAJOR, with max() over collections
- SemanticVersion: immutable major.minor.patch[-suffix] value with bump()

Only major, minor and patch take part in comparisons; the suffix is carried
through bumps and shows up in the textual form only.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Optional

from releaseos.core.errors import FormatError

# major.minor.patch with an optional -suffix
SEMVER_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)(-[A-Za-z0-9.\-]+)?$")
SUFFIX_PATTERN = re.compile(r"^-[A-Za-z0-9.\-]+$")


@total_ordering
class BumpKind(Enum):
    """Kind of version increment, totally ordered by impact."""

    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def rank(self) -> int:
        return _BUMP_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, BumpKind):
            return NotImplemented
        return self.rank < other.rank

    def __str__(self) -> str:
        return self.name

    @classmethod
    def parse(cls, value: Optional[str]) -> "BumpKind":
        """Parse a bump kind case-insensitively; None means NONE.

        Raises:
            FormatError: If the value names no bump kind
        """
        if value is None:
            return cls.NONE
        if isinstance(value, BumpKind):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise FormatError(
                f"Invalid semantic version bump '{value}', expected one of: "
                f"{', '.join(kind.value for kind in cls)}"
            ) from None

    @classmethod
    def max(cls, *bumps: Optional["BumpKind"]) -> "BumpKind":
        """Return the highest bump, or NONE for empty/all-None input.

        Accepts either several bumps or a single iterable of bumps.
        """
        if len(bumps) == 1 and not isinstance(bumps[0], BumpKind) and bumps[0] is not None:
            bumps = tuple(bumps[0])
        present = [bump for bump in bumps if bump is not None]
        return max(present, default=cls.NONE)


_BUMP_ORDER = (BumpKind.NONE, BumpKind.PATCH, BumpKind.MINOR, BumpKind.MAJOR)


@total_ordering
@dataclass(frozen=True, eq=False)
class SemanticVersion:
    """Semantic version major.minor.patch with optional -suffix."""

    major: int
    minor: int
    patch: int
    suffix: Optional[str] = None

    def __post_init__(self):
        if self.major < 0 or self.minor < 0 or self.patch < 0:
            raise FormatError("Version parts must be non-negative")
        if self.suffix == "":
            object.__setattr__(self, "suffix", None)
        if self.suffix is not None:
            _validate_suffix(self.suffix)

    @classmethod
    def parse(cls, version: str) -> "SemanticVersion":
        """Parse 'major.minor.patch[-suffix]'.

        Raises:
            FormatError: If the text is not a semantic version
        """
        if version is None:
            raise FormatError("Version must not be None")
        text = version.strip()
        match = SEMVER_PATTERN.match(text)
        if not match:
            raise FormatError(
                f"Invalid semantic version format: {text}, should match the regex {SEMVER_PATTERN.pattern}"
            )
        return cls(
            int(match.group(1)),
            int(match.group(2)),
            int(match.group(3)),
            match.group(4),
        )

    @classmethod
    def is_valid(cls, version: Optional[str]) -> bool:
        return version is not None and SEMVER_PATTERN.match(version.strip()) is not None

    def bump(self, kind: BumpKind) -> "SemanticVersion":
        if kind is BumpKind.MAJOR:
            return SemanticVersion(self.major + 1, 0, 0, self.suffix)
        if kind is BumpKind.MINOR:
            return SemanticVersion(self.major, self.minor + 1, 0, self.suffix)
        if kind is BumpKind.PATCH:
            return SemanticVersion(self.major, self.minor, self.patch + 1, self.suffix)
        if kind is BumpKind.NONE:
            return self
        raise TypeError(f"Unsupported bump kind: {kind!r}")

    def strip_suffix(self) -> "SemanticVersion":
        if self.suffix is None:
            return self
        return SemanticVersion(self.major, self.minor, self.patch)

    def with_suffix(self, suffix: str) -> "SemanticVersion":
        """Return this version with the given suffix (which must start with '-')."""
        _validate_suffix(suffix)
        if self.suffix == suffix:
            return self
        return SemanticVersion(self.major, self.minor, self.patch, suffix)

    def _key(self) -> tuple:
        return (self.major, self.minor, self.patch)

    def __eq__(self, other):
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}{self.suffix or ''}"


def _validate_suffix(suffix: str) -> None:
    if suffix is None or not SUFFIX_PATTERN.match(suffix):
        raise FormatError(
            f"Invalid version suffix '{suffix}': must start with a dash followed by "
            f"alphanumeric characters, dots or dashes"
        )

