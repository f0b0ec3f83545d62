import yaml

from arp_ping_scanner.config.config_loader import ConfigLoader, ScanConfig


def _write(path, data):
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_missing_file_gives_defaults(tmp_path, quiet_logger):
    config = ConfigLoader(tmp_path, quiet_logger).load_scan_config("absent.yml")
    assert config == ScanConfig()


def test_packaged_default_config_matches_dataclass(quiet_logger):
    assert ConfigLoader(logger=quiet_logger).load_scan_config() == ScanConfig()


def test_values_are_loaded(tmp_path, quiet_logger):
    _write(tmp_path / "scan_config.yml", {"scan": {
        "concurrency_limit": 25,
        "ping_timeout": 0.5,
        "reachability_method": "scapy",
        "link_address_method": "ip-neigh",
        "command_timeout": 2,
        "max_addresses": 1024,
    }})

    config = ConfigLoader(tmp_path, quiet_logger).load_scan_config()

    assert config == ScanConfig(25, 0.5, "scapy", "ip-neigh", 2.0, 1024)


def test_invalid_values_fall_back_per_field(tmp_path, quiet_logger):
    path = _write(tmp_path / "custom.yml", {"scan": {
        "concurrency_limit": 0,
        "ping_timeout": "fast",
        "reachability_method": "carrier-pigeon",
        "max_addresses": -5,
    }})

    config = ConfigLoader(logger=quiet_logger).load_scan_config(path)

    assert config == ScanConfig()


def test_broken_yaml_gives_defaults(tmp_path, quiet_logger):
    (tmp_path / "scan_config.yml").write_text("scan: [unclosed", encoding="utf-8")
    assert ConfigLoader(tmp_path, quiet_logger).load_scan_config() == ScanConfig()


def test_wrong_structure_gives_defaults(tmp_path, quiet_logger):
    _write(tmp_path / "scan_config.yml", {"nmap": {"timeout": 3}})
    assert ConfigLoader(tmp_path, quiet_logger).load_scan_config() == ScanConfig()


def test_create_default_config_round_trips(tmp_path, quiet_logger):
    loader = ConfigLoader(tmp_path / "conf", quiet_logger)

    path = loader.create_default_config()

    assert path.exists()
    assert loader.load_scan_config() == ScanConfig()
