from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .command import CommandRunner, run_cmd
from .env import PATHS, FetchPaths
from .net import get_nic_links

logger = logging.getLogger(__name__)

_DMI_FIELDS = (
    "sys_vendor",
    "product_name",
    "product_version",
    "product_serial",
    "product_uuid",
    "board_name",
)


def _read_text(path: Path) -> Optional[str]:
    try:
        txt = path.read_text(encoding="utf-8", errors="ignore").strip()
        return txt or None
    except OSError:
        return None


def get_sysinfo(paths: FetchPaths = PATHS, *, runner: CommandRunner = run_cmd) -> Dict[str, Any]:
    """Collect the identity payload sent along with the answer request.

    DMI values are best-effort (unreadable files become None, serial/uuid
    usually need root). NIC enumeration failures propagate.
    """

    dmi = Path(paths.dmi_dir)
    info: Dict[str, Any] = {
        "product": {field: _read_text(dmi / field) for field in _DMI_FIELDS},
        "network_interfaces": get_nic_links(paths, runner=runner),
    }
    logger.info(
        "System: vendor=%s product=%s nics=%d",
        info["product"]["sys_vendor"],
        info["product"]["product_name"],
        len(info["network_interfaces"]),
    )
    return info
