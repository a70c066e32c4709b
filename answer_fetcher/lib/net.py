from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from .command import CommandRunner, run_cmd
from .env import PATHS, FetchPaths

logger = logging.getLogger(__name__)


def _ip_links(paths: FetchPaths, runner: CommandRunner) -> List[Dict[str, Any]]:
    r = runner([paths.ip_binary, "-j", "link"])
    links = json.loads(r.stdout or "[]")
    if not isinstance(links, list):
        raise ValueError(f"Unexpected 'ip -j link' output: {type(links)}")
    return [link for link in links if link.get("ifname") != "lo"]


def get_nic_list(paths: FetchPaths = PATHS, *, runner: CommandRunner = run_cmd) -> List[str]:
    """Names of usable NICs (loopback excluded)."""

    return [str(link["ifname"]) for link in _ip_links(paths, runner)]


def get_nic_links(paths: FetchPaths = PATHS, *, runner: CommandRunner = run_cmd) -> List[Dict[str, Any]]:
    return [
        {"link": str(link["ifname"]), "mac": link.get("address")}
        for link in _ip_links(paths, runner)
    ]
