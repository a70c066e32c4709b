from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .lib.command import CommandRunner, run_cmd
from .lib.env import PATHS, FetchPaths
from .sources import (
    AnswerSource,
    DhcpLeaseSource,
    DnsTxtSource,
    PartitionFingerprintSource,
    SourceOutcome,
)

logger = logging.getLogger(__name__)


class AnswerLocationError(RuntimeError):
    """No source produced an answer URL."""


@dataclass(frozen=True)
class AnswerLocation:
    url: str
    fingerprint: Optional[str] = None
    url_source: Optional[str] = None
    fingerprint_source: Optional[str] = None


class AnswerSourceResolver:
    """Combine partition file, DHCP lease and DNS TXT into one AnswerLocation.

    Precedence:
    - The partition fingerprint file is probed first and, when present,
      locks the fingerprint. It never provides a URL.
    - DHCP is tried next. If it yields a URL, DNS is never consulted.
    - DNS is the last resort; if it fails too, resolution fails.
    - A fingerprint from an earlier source is never replaced by a later one.
    """

    def __init__(
        self,
        paths: FetchPaths = PATHS,
        *,
        runner: CommandRunner = run_cmd,
        fingerprint_source: Optional[AnswerSource] = None,
        url_sources: Optional[List[AnswerSource]] = None,
    ) -> None:
        self.paths = paths
        self.fingerprint_source = fingerprint_source or PartitionFingerprintSource(paths, runner=runner)
        self.url_sources = url_sources if url_sources is not None else [
            DhcpLeaseSource(paths),
            DnsTxtSource(paths, runner=runner),
        ]
        self.outcomes: List[SourceOutcome] = []

    def resolve(self) -> AnswerLocation:
        self.outcomes = []

        logger.info("Checking for certificate fingerprint in file.")
        fp_outcome = self._probe(self.fingerprint_source, None)
        fingerprint = fp_outcome.fingerprint if fp_outcome.found else None
        fingerprint_from = fp_outcome.source if fingerprint else None

        location: Optional[AnswerLocation] = None
        for source in self.url_sources:
            outcome = self._probe(source, fingerprint)
            if not (outcome.found and outcome.url):
                continue
            if not fingerprint and outcome.fingerprint:
                fingerprint = outcome.fingerprint
                fingerprint_from = outcome.source
            location = AnswerLocation(
                url=outcome.url,
                fingerprint=fingerprint,
                url_source=outcome.source,
                fingerprint_source=fingerprint_from,
            )
            break

        if location is None:
            reasons = "; ".join(f"{o.source}: {o.reason}" for o in self.outcomes[1:])
            raise AnswerLocationError(f"Could not determine answer URL ({reasons})")

        if location.fingerprint:
            self._persist_fingerprint(location.fingerprint)

        logger.info(
            "Answer URL '%s' from %s, fingerprint from %s",
            location.url,
            location.url_source,
            location.fingerprint_source or "nowhere",
        )
        return location

    def _probe(self, source: AnswerSource, fingerprint: Optional[str]) -> SourceOutcome:
        outcome = source.probe(fingerprint)
        self.outcomes.append(outcome)
        if not outcome.found:
            logger.info("Source %s %s: %s", outcome.source, outcome.status.value, outcome.reason)
        return outcome

    def _persist_fingerprint(self, fingerprint: str) -> None:
        out = Path(self.paths.fingerprint_out)
        try:
            out.write_text(fingerprint, encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write certificate fingerprint to %s: %s", out, e)


def resolve_answer_location(paths: FetchPaths = PATHS, *, runner: CommandRunner = run_cmd) -> AnswerLocation:
    return AnswerSourceResolver(paths, runner=runner).resolve()
