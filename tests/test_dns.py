from pathlib import Path

import pytest

from answer_fetcher.sources import SourceStatus
from answer_fetcher.sources.dns import DnsQueryError, DnsTxtSource, get_search_domain, query_txt_record


def _dig(records):
    def handler(argv):
        name = argv[-1]
        if name in records:
            return records[name]
        return (0, "", "")

    return handler


def test_get_search_domain(tmp_path):
    conf = tmp_path / "resolv.conf"
    conf.write_text(
        "# generated by dhclient\ndomain lan\nsearch example.com corp.example.com\nsearch other.org\n",
        encoding="utf-8",
    )

    assert get_search_domain(str(conf)) == "example.com"


def test_get_search_domain_missing(tmp_path):
    conf = tmp_path / "resolv.conf"
    conf.write_text("nameserver 10.0.0.1\nsearchx nope\n", encoding="utf-8")

    with pytest.raises(LookupError):
        get_search_domain(str(conf))


def test_query_txt_record_strips_quotes(fake_runner):
    fake_runner.script["dig"] = (0, '"http://cfg.example.com/a.toml"\n', "")

    assert query_txt_record("proxmoxinst.example.com", runner=fake_runner) == "http://cfg.example.com/a.toml"
    assert fake_runner.calls == [["dig", "txt", "+short", "proxmoxinst.example.com"]]


def test_query_txt_record_nonzero_exit_carries_stderr(fake_runner):
    fake_runner.script["dig"] = (9, "", "connection timed out; no servers could be reached")

    with pytest.raises(DnsQueryError, match="no servers could be reached"):
        query_txt_record("proxmoxinst.example.com", runner=fake_runner)


def test_query_txt_record_blank_answer(fake_runner):
    fake_runner.script["dig"] = (0, '  ""\n', "")

    with pytest.raises(DnsQueryError, match="empty"):
        query_txt_record("proxmoxinst.example.com", runner=fake_runner)


def test_query_txt_record_missing_tool(fake_runner):
    fake_runner.script["dig"] = FileNotFoundError("dig")

    with pytest.raises(DnsQueryError):
        query_txt_record("proxmoxinst.example.com", runner=fake_runner)


@pytest.fixture
def resolv(paths):
    Path(paths.resolv_conf).write_text("search example.com\nnameserver 10.0.0.1\n", encoding="utf-8")
    return paths


def test_probe_url_and_fingerprint(resolv, fake_runner):
    fake_runner.script["dig"] = _dig(
        {
            "proxmoxinst.example.com": (0, '"https://cfg.example.com/answer"\n', ""),
            "proxmoxinst-fp.example.com": (0, '"aa:bb:cc"\n', ""),
        }
    )

    outcome = DnsTxtSource(resolv, runner=fake_runner).probe(None)

    assert outcome.found
    assert outcome.url == "https://cfg.example.com/answer"
    assert outcome.fingerprint == "aa:bb:cc"


def test_probe_skips_fingerprint_query_when_locked(resolv, fake_runner):
    fake_runner.script["dig"] = _dig({"proxmoxinst.example.com": (0, "https://x/a\n", "")})

    outcome = DnsTxtSource(resolv, runner=fake_runner).probe("11:22")

    assert outcome.fingerprint == "11:22"
    assert [c[-1] for c in fake_runner.invocations("dig")] == ["proxmoxinst.example.com"]


def test_probe_fingerprint_failure_is_not_fatal(resolv, fake_runner):
    fake_runner.script["dig"] = _dig(
        {
            "proxmoxinst.example.com": (0, "https://x/a\n", ""),
            "proxmoxinst-fp.example.com": (9, "", "SERVFAIL"),
        }
    )

    outcome = DnsTxtSource(resolv, runner=fake_runner).probe(None)

    assert outcome.found
    assert outcome.fingerprint is None


def test_probe_url_failure(resolv, fake_runner):
    outcome = DnsTxtSource(resolv, runner=fake_runner).probe(None)

    assert outcome.status is SourceStatus.FAILED
    assert "empty" in outcome.reason


def test_probe_without_search_domain(paths, fake_runner):
    Path(paths.resolv_conf).write_text("nameserver 10.0.0.1\n", encoding="utf-8")

    outcome = DnsTxtSource(paths, runner=fake_runner).probe(None)

    assert outcome.status is SourceStatus.ABSENT
    assert fake_runner.calls == []
