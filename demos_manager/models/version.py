"""
Immutable, totally ordered application version.
"""

import re
from dataclasses import dataclass, field
from functools import total_ordering

from demos_manager.exceptions import InvalidVersionError

_VERSION_REGEX = re.compile(r"^\d+(\.\d+){1,3}$")


@total_ordering
@dataclass(frozen=True, eq=False)
class AppVersion:
    """
    A `major.minor[.build[.revision]]` version.

    Missing trailing components compare as zero, so `1.2` and `1.2.0` are equal.
    """

    parts: tuple[int, ...]
    _key: tuple[int, int, int, int] = field(init=False, repr=False)

    def __post_init__(self):
        if not 2 <= len(self.parts) <= 4:
            raise InvalidVersionError(
                f"A version needs 2 to 4 components, got {len(self.parts)}."
            )
        if any(p < 0 for p in self.parts):
            raise InvalidVersionError("Version components cannot be negative.")
        padded = tuple(self.parts) + (0,) * (4 - len(self.parts))
        object.__setattr__(self, "_key", padded)

    @classmethod
    def parse(cls, value: str) -> "AppVersion":
        """Parses a version string such as '2.3.1'."""
        if not isinstance(value, str):
            raise InvalidVersionError(f"Expected a version string, got {value!r}.")
        text = value.strip()
        if not _VERSION_REGEX.match(text):
            raise InvalidVersionError(f"Invalid version string: {value!r}")
        return cls(tuple(int(p) for p in text.split(".")))

    @classmethod
    def coerce(cls, value: "AppVersion | str") -> "AppVersion":
        """Returns `value` unchanged if it is already a version, otherwise parses it."""
        if isinstance(value, AppVersion):
            return value
        return cls.parse(value)

    @property
    def major(self) -> int:
        return self.parts[0]

    @property
    def minor(self) -> int:
        return self.parts[1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AppVersion):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other: "AppVersion") -> bool:
        if not isinstance(other, AppVersion):
            return NotImplemented
        return self._key < other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        return ".".join(str(p) for p in self.parts)
