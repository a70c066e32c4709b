from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol


class SourceStatus(str, Enum):
    FOUND = "found"
    ABSENT = "absent"
    FAILED = "failed"


@dataclass(frozen=True)
class SourceOutcome:
    """Result of probing one discovery source.

    - FOUND: the source delivered what it is responsible for.
    - ABSENT: the source is reachable but has nothing for us.
    - FAILED: the source itself could not be read or queried.
    """

    source: str
    status: SourceStatus
    url: Optional[str] = None
    fingerprint: Optional[str] = None
    reason: str = ""

    @property
    def found(self) -> bool:
        return self.status is SourceStatus.FOUND

    @classmethod
    def absent(cls, source: str, reason: str) -> "SourceOutcome":
        return cls(source=source, status=SourceStatus.ABSENT, reason=reason)

    @classmethod
    def failed(cls, source: str, reason: str) -> "SourceOutcome":
        return cls(source=source, status=SourceStatus.FAILED, reason=reason)


class AnswerSource(Protocol):
    """A single discovery source.

    ``fingerprint`` is the value already locked by a higher-precedence
    source; a probe must hand it back unchanged when it is set.
    """

    source_id: str

    def probe(self, fingerprint: Optional[str]) -> SourceOutcome:
        ...
