"""Release version parsing and ordering.

Released version strings look like ``7.4.2`` (final), ``7.5-rc-1``,
``7.5-milestone-2`` or ``7.5-20220601000000+0000`` (nightly snapshot).
Only the released-versions catalog needs ordering; the generation core
treats versions as opaque strings.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

_VERSION_RE = re.compile(
    r"^(?P<base>\d+(?:\.\d+)*)"
    r"(?:-(?P<stage>milestone|rc)-(?P<number>\d+)"
    r"|-(?P<timestamp>\d{14}[+-]\d{4}))?$"
)

# Stage ranks within a single base version
SNAPSHOT = 0
MILESTONE = 1
RC = 2
FINAL = 3

_STAGE_RANKS = {"milestone": MILESTONE, "rc": RC}


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class ReleaseVersion:
    """A parsed release version with a total ordering."""

    text: str
    base: tuple[int, ...]
    stage: int = FINAL
    stage_number: int = 0
    timestamp: str = ""

    @classmethod
    def parse(cls, text: str) -> ReleaseVersion:
        """Parse a version string.

        Raises:
            ValueError: If the string is not a recognized release version.
        """
        if not isinstance(text, str):
            raise ValueError(f"Release version must be a string: {text!r}")
        text = text.strip()
        match = _VERSION_RE.match(text)
        if match is None:
            raise ValueError(f"Unrecognized release version: {text!r}")

        base = tuple(int(part) for part in match.group("base").split("."))
        if match.group("stage"):
            return cls(
                text=text,
                base=base,
                stage=_STAGE_RANKS[match.group("stage")],
                stage_number=int(match.group("number")),
            )
        if match.group("timestamp"):
            return cls(
                text=text,
                base=base,
                stage=SNAPSHOT,
                timestamp=match.group("timestamp"),
            )
        return cls(text=text, base=base)

    @property
    def is_final(self) -> bool:
        return self.stage == FINAL

    @property
    def base_text(self) -> str:
        """The dotted base version without any pre-release suffix."""
        return ".".join(str(part) for part in self.base)

    def _key(self) -> tuple:
        # 7.0 and 7.0.0 name the same base
        base = list(self.base)
        while len(base) > 1 and base[-1] == 0:
            base.pop()
        return (tuple(base), self.stage, self.stage_number, self.timestamp)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ReleaseVersion):
            return NotImplemented
        return self._key() < other._key()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReleaseVersion):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return self.text
