import pytest

from arp_ping_scanner import main as cli
from arp_ping_scanner.core.data_models import ProbeResult
from arp_ping_scanner.utils.logger import LogLevel, set_log_level


@pytest.fixture(autouse=True)
def no_signal_handlers(monkeypatch):
    monkeypatch.setattr(cli.signal, "signal", lambda *args: None)
    yield
    set_log_level(LogLevel.INFO)


@pytest.fixture
def fake_backends(monkeypatch, fake_reachability, fake_name_resolver, fake_link_resolver):
    reachability = fake_reachability({"10.0.0.1"})
    names = fake_name_resolver({"10.0.0.1": "gateway.lan"})
    links = fake_link_resolver({"10.0.0.1": "00-11-22-33-44-55"})

    original = cli.ScannerOrchestrator

    def orchestrator(config, logger):
        return original(config=config, reachability=reachability, name_resolver=names,
                        link_resolver=links, logger=logger)

    monkeypatch.setattr(cli, "ScannerOrchestrator", orchestrator)
    return reachability


def test_default_arguments():
    args = cli.create_argument_parser().parse_args([])
    assert args.cidr == "192.168.10.0/24"
    assert args.output is None and args.all is False


def test_scan_prints_banner_and_reachable_rows(fake_backends, tmp_path, capsys):
    csv_path = tmp_path / "hosts.csv"

    code = cli.main(["10.0.0.0/30", "-o", str(csv_path), "-c", "2"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Start Scanning network [10.0.0.0/30]..." in out
    assert "Completed Scanning network [10.0.0.0/30]..." in out
    assert "[ms]" in out
    assert "gateway.lan" in out
    assert "10.0.0.2 " not in out
    assert csv_path.read_text(encoding="utf-8") == "10.0.0.1,gateway.lan,00-11-22-33-44-55,True\n"
    assert len(fake_backends.calls) == 4


def test_all_flag_includes_unreachable_hosts(fake_backends, tmp_path, capsys):
    json_path = tmp_path / "report.json"

    code = cli.main(["10.0.0.0/31", "--all", "--json-output", str(json_path)])

    out = capsys.readouterr().out
    assert code == 0
    assert "Unreachable" in out
    assert json_path.exists()


def test_timeout_override_reaches_probe(fake_backends):
    cli.main(["10.0.0.1/32", "-t", "0.3"])
    assert fake_backends.calls == [("10.0.0.1", 0.3)]


@pytest.mark.parametrize("cidr", ["not-a-cidr", "::1/64"])
def test_range_errors_exit_with_code_2(fake_backends, cidr, capsys):
    assert cli.main([cidr]) == 2
    assert "Start Scanning" not in capsys.readouterr().out
    assert fake_backends.calls == []


def test_address_guard_exits_with_code_1(fake_backends):
    assert cli.main(["10.0.0.0/16", "--max-addresses", "1024"]) == 1
    assert fake_backends.calls == []


def test_unwritable_csv_is_reported(fake_backends, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")

    assert cli.main(["10.0.0.1/32", "-o", str(blocker / "hosts.csv")]) == 1


def test_keyboard_interrupt_exits_with_130(monkeypatch, fake_backends):
    def interrupted(address, timeout):
        raise KeyboardInterrupt

    # KeyboardInterrupt is a BaseException, so it escapes the probe boundary
    monkeypatch.setattr(fake_backends, "probe", interrupted)

    assert cli.main(["10.0.0.1/32"]) == 130

