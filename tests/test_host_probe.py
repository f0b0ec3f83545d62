import pytest

from arp_ping_scanner.core.data_models import HostOutcome, ProbeResult, ProbeStatus
from arp_ping_scanner.core.host_probe import HostProbe
from arp_ping_scanner.scanners.base_scanner import ReachabilityProber
from arp_ping_scanner.utils.error_handler import ProbeError
from arp_ping_scanner.utils.logger import Logger, LogLevel


class ExplodingReachability(ReachabilityProber):
    def probe(self, address, timeout):
        raise RuntimeError("socket exploded")


def test_unreachable_host_skips_name_and_link_probes(
    fake_reachability, fake_name_resolver, fake_link_resolver
):
    names = fake_name_resolver({"10.0.0.1": "should-not-appear"})
    links = fake_link_resolver({"10.0.0.1": "aa-bb-cc-dd-ee-ff"})
    probe = HostProbe(fake_reachability(), names, links)

    outcome = probe.probe("10.0.0.1")

    assert outcome == HostOutcome("10.0.0.1", "N/A", "N/A", False)
    assert names.calls == []
    assert links.calls == []


def test_reachable_host_with_failed_lookups_gets_sentinels(
    fake_reachability, fake_name_resolver, fake_link_resolver
):
    probe = HostProbe(
        fake_reachability({"10.0.0.2"}),
        fake_name_resolver(error=OSError("lookup timed out")),
        fake_link_resolver(),
    )

    outcome = probe.probe("10.0.0.2")

    assert outcome == HostOutcome("10.0.0.2", "Unknown", "Not Found", True)
    assert outcome.probe_results["name"].status is ProbeStatus.FAILED
    assert outcome.probe_results["name"].reason == "lookup timed out"
    assert outcome.probe_results["link_address"].status is ProbeStatus.NOT_FOUND


def test_reachable_host_with_all_values(fake_reachability, fake_name_resolver, fake_link_resolver):
    probe = HostProbe(
        fake_reachability({"10.0.0.3"}),
        fake_name_resolver({"10.0.0.3": "printer.lan"}),
        fake_link_resolver({"10.0.0.3": "00-11-22-33-44-55"}),
    )

    assert probe("10.0.0.3") == HostOutcome("10.0.0.3", "printer.lan", "00-11-22-33-44-55", True)


def test_link_query_failure_is_reported_as_error_text(
    fake_reachability, fake_name_resolver, fake_link_resolver
):
    probe = HostProbe(
        fake_reachability({"10.0.0.4"}),
        fake_name_resolver({"10.0.0.4": "nas"}),
        fake_link_resolver(error=ProbeError("[Errno 2] No such file or directory: 'arp'")),
    )

    outcome = probe.probe("10.0.0.4")

    assert outcome.reachable is True
    assert outcome.display_name == "nas"
    assert outcome.link_address == "Error: [Errno 2] No such file or directory: 'arp'"


def test_reachability_exception_degrades_to_unreachable(fake_name_resolver, fake_link_resolver):
    names = fake_name_resolver()
    links = fake_link_resolver()
    probe = HostProbe(ExplodingReachability(), names, links)

    outcome = probe.probe("10.0.0.5")

    assert outcome == HostOutcome("10.0.0.5", "N/A", "N/A", False)
    assert outcome.probe_results["reachability"] == ProbeResult.failed("socket exploded")
    assert names.calls == [] and links.calls == []


def test_timeout_is_passed_to_reachability(fake_reachability, fake_name_resolver, fake_link_resolver):
    reachability = fake_reachability()
    HostProbe(reachability, fake_name_resolver(), fake_link_resolver(), timeout=0.25).probe("10.0.0.6")

    assert reachability.calls == [("10.0.0.6", 0.25)]


def test_probe_results_do_not_affect_equality():
    a = HostOutcome("10.0.0.7", "x", "y", True, {"name": ProbeResult.success("x")})
    b = HostOutcome("10.0.0.7", "x", "y", True)
    assert a == b


def test_probe_results_cannot_be_modified():
    results = {"reachability": ProbeResult.not_found("no echo reply")}
    outcome = HostOutcome("10.0.0.8", "N/A", "N/A", False, results)

    results["reachability"] = ProbeResult.success(True)
    with pytest.raises(TypeError):
        outcome.probe_results["reachability"] = ProbeResult.success(True)

    assert outcome.probe_results["reachability"].status is ProbeStatus.NOT_FOUND


def test_first_reachability_failure_is_warned_once(fake_name_resolver, fake_link_resolver, capsys):
    logger = Logger("test", min_level=LogLevel.WARNING)
    probe = HostProbe(ExplodingReachability(), fake_name_resolver(), fake_link_resolver(), logger=logger)

    for address in ("10.0.0.9", "10.0.0.10", "10.0.0.11"):
        assert probe.probe(address).reachable is False

    out = capsys.readouterr().out
    assert out.count("socket exploded") == 1
    assert "10.0.0.9" in out and "WARNING" in out


def test_unanswered_echo_is_not_warned(fake_reachability, fake_name_resolver, fake_link_resolver, capsys):
    logger = Logger("test", min_level=LogLevel.WARNING)
    probe = HostProbe(fake_reachability(), fake_name_resolver(), fake_link_resolver(), logger=logger)

    probe.probe("10.0.0.12")

    assert capsys.readouterr().out == ""
