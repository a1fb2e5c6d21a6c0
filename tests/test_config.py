import pytest

from swiftguard.config import Configuration, load_configuration
from swiftguard.errors import ConfigurationError
from swiftguard.rules.optional_initialization import OptionalInitializationRule
from swiftguard.severity import Severity

KNOWN = ["optional_initialization"]


def test_opt_in_rule_is_off_by_default():
    assert Configuration().enabled_rules([OptionalInitializationRule]) == []


def test_opt_in_with_configured_severity(tmp_path):
    config = tmp_path / ".swiftguard.yml"
    config.write_text(
        "opt_in_rules:\n"
        "  - optional_initialization\n"
        "optional_initialization:\n"
        "  severity: error\n",
        encoding="utf-8",
    )

    configuration = load_configuration(str(config), known_rules=KNOWN)
    rules = configuration.enabled_rules([OptionalInitializationRule])

    assert len(rules) == 1
    assert rules[0].severity is Severity.ERROR
    assert configuration.source == config


def test_only_rules_and_bare_severity_string():
    configuration = Configuration.from_dict(
        {"only_rules": ["optional_initialization"], "optional_initialization": "Warning"},
        known_rules=KNOWN,
    )

    [rule] = configuration.enabled_rules([OptionalInitializationRule])

    assert rule.severity is Severity.WARNING


def test_disabled_rules_win_over_opt_in():
    configuration = Configuration.from_dict(
        {"opt_in_rules": ["optional_initialization"], "disabled_rules": ["optional_initialization"]},
        known_rules=KNOWN,
    )

    assert configuration.enabled_rules([OptionalInitializationRule]) == []


def test_invalid_severity_is_rejected():
    with pytest.raises(ConfigurationError):
        Configuration.from_dict({"optional_initialization": {"severity": "fatal"}}, known_rules=KNOWN)


def test_rule_lists_must_hold_strings():
    with pytest.raises(ConfigurationError):
        Configuration.from_dict({"opt_in_rules": [1, 2]}, known_rules=KNOWN)


def test_non_mapping_file_is_rejected(tmp_path):
    config = tmp_path / "config.yml"
    config.write_text("- optional_initialization\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_configuration(str(config), known_rules=KNOWN)


def test_malformed_yaml_is_rejected(tmp_path):
    config = tmp_path / "config.yml"
    config.write_text("opt_in_rules: [optional_initialization\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_configuration(str(config), known_rules=KNOWN)


def test_missing_explicit_file_is_rejected(tmp_path):
    with pytest.raises(ConfigurationError):
        load_configuration(str(tmp_path / "missing.yml"))


def test_missing_default_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert load_configuration() == Configuration()


def test_default_file_in_working_directory_is_loaded(tmp_path, monkeypatch):
    (tmp_path / ".swiftguard.yml").write_text("included:\n  - Sources\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    configuration = load_configuration(known_rules=KNOWN)

    assert configuration.resolve_paths([]) == ["Sources"]
    assert configuration.resolve_paths(["Other"]) == ["Other"]
    assert Configuration().resolve_paths([]) == ["."]
