from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..lib.command import CommandRunner, run_cmd
from ..lib.env import FetchPaths
from .base import SourceOutcome, SourceStatus

logger = logging.getLogger(__name__)


class DnsQueryError(RuntimeError):
    pass


def get_search_domain(resolv_conf: str = "/etc/resolv.conf") -> str:
    """First domain of the first ``search`` line in resolv.conf."""

    logger.info("Retrieving default search domain.")
    for line in Path(resolv_conf).read_text(encoding="utf-8").splitlines():
        fields = line.split()
        if len(fields) > 1 and fields[0] == "search":
            return fields[1]
    raise LookupError(f"Could not find search domain in {resolv_conf}.")


def query_txt_record(name: str, *, runner: CommandRunner = run_cmd) -> str:
    logger.info("Querying TXT record for '%s'", name)
    try:
        r = runner(["dig", "txt", "+short", name], check=False)
    except (OSError, UnicodeDecodeError) as e:
        raise DnsQueryError(f"Error querying DNS record '{name}': {e}") from e

    if r.returncode != 0:
        raise DnsQueryError(f"Error querying DNS record '{name}': {(r.stderr or '').strip()}")

    value = (r.stdout or "").replace('"', "").strip()
    if not value:
        raise DnsQueryError(f"Got empty response for '{name}'.")

    logger.info("Found: '%s'", value)
    return value


class DnsTxtSource:
    source_id = "dns"

    def __init__(self, paths: FetchPaths, *, runner: CommandRunner = run_cmd) -> None:
        self.paths = paths
        self.runner = runner

    def probe(self, fingerprint: Optional[str]) -> SourceOutcome:
        try:
            domain = get_search_domain(self.paths.resolv_conf)
        except LookupError as e:
            return SourceOutcome.absent(self.source_id, str(e))
        except (OSError, UnicodeDecodeError) as e:
            return SourceOutcome.failed(self.source_id, f"Could not read {self.paths.resolv_conf}: {e}")

        try:
            url = query_txt_record(f"{self.paths.answer_subdomain}.{domain}", runner=self.runner)
        except DnsQueryError as e:
            return SourceOutcome.failed(self.source_id, str(e))

        if not fingerprint:
            try:
                fingerprint = query_txt_record(
                    f"{self.paths.answer_subdomain_fp}.{domain}", runner=self.runner
                )
            except DnsQueryError as e:
                logger.info("%s", e)

        return SourceOutcome(self.source_id, SourceStatus.FOUND, url=url, fingerprint=fingerprint)
