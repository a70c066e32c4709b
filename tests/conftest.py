from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Tuple, Union

import pytest

from answer_fetcher.lib.command import CmdResult
from answer_fetcher.lib.env import FetchPaths


class FakeRunner:
    """Scripted stand-in for run_cmd keyed on argv[0]."""

    def __init__(self, script: Dict[str, Union[Tuple[int, str, str], Callable, Exception]] | None = None):
        self.script = dict(script or {})
        self.calls: List[List[str]] = []

    def __call__(self, argv: Sequence[str], *, check: bool = True, **_kwargs) -> CmdResult:
        argv = list(argv)
        self.calls.append(argv)
        entry = self.script.get(argv[0], (0, "", ""))
        if callable(entry):
            entry = entry(argv)
        if isinstance(entry, Exception):
            raise entry
        rc, out, err = entry
        if check and rc != 0:
            raise RuntimeError(f"Command failed ({rc}): {argv}")
        return CmdResult(argv=argv, returncode=rc, stdout=out, stderr=err)

    def invocations(self, binary: str) -> List[List[str]]:
        return [c for c in self.calls if c[0] == binary]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def paths(tmp_path) -> FetchPaths:
    """FetchPaths rooted in tmp_path; nothing exists until a test creates it."""

    by_label = tmp_path / "by-label"
    by_label.mkdir()
    mounts = tmp_path / "mounts"
    mounts.write_text("proc /proc proc rw 0 0\n", encoding="utf-8")
    return FetchPaths(
        answer_mountpoint=str(tmp_path / "mnt" / "answer"),
        label_search_dir=str(by_label),
        mounts_table=str(mounts),
        fingerprint_out=str(tmp_path / "cert_fingerprint"),
        dhcp_lease_file=str(tmp_path / "dhclient.leases"),
        resolv_conf=str(tmp_path / "resolv.conf"),
        ip_binary="ip",
        dmi_dir=str(tmp_path / "dmi"),
    )
