from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from ..lib.env import FetchPaths
from .base import SourceOutcome, SourceStatus

logger = logging.getLogger(__name__)

# dhclient only records the vendor options when told about them, e.g. in
# /etc/dhcp/dhclient.conf:
#
#   option proxmoxinst-url code 250 = text;
#   option proxmoxinst-fp code 251 = text;
#   also request proxmoxinst-url, proxmoxinst-fp;
#
# The negotiated values then show up quoted in the lease file:
#
#   option proxmoxinst-url "https://10.0.0.5/answer";


def strip_dhcp_option(token: str) -> str:
    """``"value";`` -> ``value``."""

    if len(token) < 3 or not token.startswith('"') or not token.endswith('";'):
        raise ValueError(f"Malformed DHCP option value: {token!r}")
    return token[1:-2]


def scan_lease_options(
    leases: str,
    url_option: str,
    fp_option: Optional[str],
) -> Tuple[Optional[str], Optional[str]]:
    """First occurrence of each option in file order, unquoted.

    Lease stanzas are not tracked: an older lease listed first wins.
    ``fp_option=None`` skips the fingerprint entirely.
    """

    url_match = f"option {url_option}"
    fp_match = f"option {fp_option}" if fp_option else None
    url: Optional[str] = None
    fp: Optional[str] = None

    for line in leases.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if url is None and stripped.startswith(url_match):
            url = strip_dhcp_option(stripped.split()[-1])
        if fp_match and fp is None and stripped.startswith(fp_match):
            fp = strip_dhcp_option(stripped.split()[-1])
        if url is not None and (fp is not None or fp_match is None):
            break

    return url, fp


class DhcpLeaseSource:
    source_id = "dhcp"

    def __init__(self, paths: FetchPaths) -> None:
        self.paths = paths

    def probe(self, fingerprint: Optional[str]) -> SourceOutcome:
        lease_file = self.paths.dhcp_lease_file
        try:
            leases = Path(lease_file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return SourceOutcome.failed(self.source_id, f"Could not read DHCP lease file {lease_file}: {e}")

        try:
            url, lease_fp = scan_lease_options(
                leases,
                self.paths.dhcp_url_option,
                None if fingerprint else self.paths.dhcp_fp_option,
            )
        except ValueError as e:
            return SourceOutcome.failed(self.source_id, str(e))

        if url is None:
            return SourceOutcome.absent(self.source_id, "No DHCP option found for fetch URL.")

        logger.info("Found answer URL in DHCP lease: '%s'", url)
        if not fingerprint and lease_fp:
            logger.info("Found certificate fingerprint in DHCP lease.")
            fingerprint = lease_fp
        return SourceOutcome(self.source_id, SourceStatus.FOUND, url=url, fingerprint=fingerprint)
