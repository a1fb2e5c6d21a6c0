"""Load ``.swiftguard.yml`` and decide which rules run at which severity."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple, Type

from .errors import ConfigurationError
from .rules import Rule
from .severity import Severity
from .utils.fileio import read_yaml_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = ".swiftguard.yml"
LIST_KEYS = ("disabled_rules", "opt_in_rules", "only_rules", "included", "excluded")


def _ensure_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigurationError(f"'{key}' must be a list of strings")


def _parse_severity(rule_id: str, value: Any) -> Severity:
    if isinstance(value, dict):
        value = value.get("severity")
    try:
        return Severity(str(value).lower())
    except ValueError as exc:
        choices = ", ".join(severity.value for severity in Severity)
        raise ConfigurationError(f"Invalid severity {value!r} for '{rule_id}' (expected one of: {choices})") from exc


@dataclass
class Configuration:
    """Rule selection, per-rule severities and path filters."""

    disabled_rules: FrozenSet[str] = frozenset()
    opt_in_rules: FrozenSet[str] = frozenset()
    only_rules: FrozenSet[str] = frozenset()
    included: Tuple[str, ...] = ()
    excluded: Tuple[str, ...] = ()
    severities: Dict[str, Severity] = field(default_factory=dict)
    source: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Any, known_rules: Iterable[str] = (), source: Optional[Path] = None) -> "Configuration":
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration at {source or '<memory>'} is not a mapping")

        lists = {key: _ensure_list(data, key) for key in LIST_KEYS}
        known = set(known_rules)
        severities: Dict[str, Severity] = {}
        for key, value in data.items():
            if key in LIST_KEYS:
                continue
            if key in known:
                severities[key] = _parse_severity(key, value)
            else:
                logger.warning("Ignoring unknown configuration key '%s'", key)

        for key in ("disabled_rules", "opt_in_rules", "only_rules"):
            for rule_id in lists[key]:
                if known and rule_id not in known:
                    logger.warning("'%s' lists unknown rule '%s'", key, rule_id)

        return cls(
            disabled_rules=frozenset(lists["disabled_rules"]),
            opt_in_rules=frozenset(lists["opt_in_rules"]),
            only_rules=frozenset(lists["only_rules"]),
            included=tuple(lists["included"]),
            excluded=tuple(lists["excluded"]),
            severities=severities,
            source=source,
        )

    def is_enabled(self, rule_id: str, opt_in: bool) -> bool:
        if self.only_rules:
            return rule_id in self.only_rules
        if rule_id in self.disabled_rules:
            return False
        return not opt_in or rule_id in self.opt_in_rules

    def enabled_rules(self, rule_types: Iterable[Type[Rule]]) -> List[Rule]:
        """Instantiate the enabled rules with their configured severity."""

        rules: List[Rule] = []
        for rule_type in rule_types:
            rule_id = rule_type.description.identifier
            if not self.is_enabled(rule_id, rule_type.opt_in):
                logger.debug("Rule %s is not enabled", rule_id)
                continue
            rules.append(rule_type(severity=self.severities.get(rule_id)))
        return rules

    def resolve_paths(self, paths: Iterable[str]) -> List[str]:
        """Return the lint roots: explicit paths, else ``included``, else the cwd."""

        explicit = list(paths)
        if explicit:
            return explicit
        if self.included:
            return list(self.included)
        return ["."]


def load_configuration(path: Optional[str] = None, known_rules: Iterable[str] = ()) -> Configuration:
    """Load the configuration file, or the defaults when no file applies.

    An explicit ``path`` must exist. Without one, ``.swiftguard.yml`` in the
    working directory is used when present.
    """

    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigurationError(f"Configuration file not found: {path}")
    else:
        config_path = Path(DEFAULT_CONFIG_FILENAME)
        if not config_path.is_file():
            logger.debug("No %s found; using default configuration", DEFAULT_CONFIG_FILENAME)
            return Configuration()

    data = read_yaml_file(config_path)
    configuration = Configuration.from_dict(data, known_rules=known_rules, source=config_path)
    logger.debug("Loaded configuration from %s", config_path)
    return configuration
