"""
Release identifiers for mod changelogs.
"""

import re
from dataclasses import dataclass
from functools import total_ordering

_VERSION_RE = re.compile(
    r"^\s*[vV]?(?P<numbers>\d+(?:\.\d+)*)"
    r"(?:[-+_ ]?(?P<qualifier>[0-9A-Za-z][0-9A-Za-z.\-]*))?\s*$"
)

# Digit runs and text runs of a qualifier, e.g. "rc10" -> "rc", "10"
_QUALIFIER_PART_RE = re.compile(r"\d+|\D+")

# major.minor.patch
MIN_COMPONENTS = 3


class VersionParseError(ValueError):
    """Raised when a version string cannot be parsed."""

    pass


@total_ordering
@dataclass(frozen=True)
class Version:
    """
    One release identifier: numeric components plus an optional qualifier.

    Components are padded to major.minor.patch, so "1.2" and "1.2.0" are the
    same version. Numeric components dominate; for equal numbers a release
    without a qualifier sorts above one with a qualifier (1.0.0 > 1.0.0-beta),
    and qualifiers compare run by run with digit runs taken as numbers
    (rc10 > rc9).
    """

    components: tuple[int, ...]
    qualifier: str = ""

    def __post_init__(self):
        parts = tuple(int(c) for c in self.components)
        if any(c < 0 for c in parts):
            raise VersionParseError(f"Negative version component in {parts}")
        if len(parts) < MIN_COMPONENTS:
            parts = parts + (0,) * (MIN_COMPONENTS - len(parts))
        while len(parts) > MIN_COMPONENTS and parts[-1] == 0:
            parts = parts[:-1]
        object.__setattr__(self, "components", parts)

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse text such as "1.2.3", "v2.0" or "1.4.0-beta2"."""
        match = _VERSION_RE.match(text or "")
        if not match:
            raise VersionParseError(f"Invalid version string: {text!r}")

        numbers = tuple(int(n) for n in match.group("numbers").split("."))
        return cls(numbers, match.group("qualifier") or "")

    @property
    def major(self) -> int:
        return self.components[0]

    @property
    def minor(self) -> int:
        return self.components[1]

    @property
    def patch(self) -> int:
        return self.components[2]

    def _qualifier_key(self) -> tuple:
        return tuple(
            (0, int(part)) if part.isdigit() else (1, part)
            for part in _QUALIFIER_PART_RE.findall(self.qualifier)
        )

    def sort_key(self) -> tuple:
        # A missing qualifier is a final release and ranks above pre-releases.
        if not self.qualifier:
            return (self.components, (1, (), ""))
        return (self.components, (0, self._qualifier_key(), self.qualifier))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        text = ".".join(str(c) for c in self.components)
        if self.qualifier:
            text = f"{text}-{self.qualifier}"
        return text
