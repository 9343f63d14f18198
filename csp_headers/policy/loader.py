# csp_headers/policy/loader.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from csp_headers import config
from csp_headers.config import ConfigError
from csp_headers.log import warn

from .builder import to_kebab_case
from .model import POLICY_FIELDS, Inputs, PolicySet

# Plugin-style input names -> Inputs fields
_INPUT_KEYS = {
    "buildDir": "build_dir",
    "build_dir": "build_dir",
    "exclude": "exclude",
    "policies": "policies",
    "setAllPolicies": "set_all_policies",
    "set_all_policies": "set_all_policies",
    "append": "append",
}


def directive_field(key: str) -> Optional[str]:
    """Map any accepted key spelling to a PolicySet field name, or None."""
    name = to_kebab_case(key.strip()).replace("-", "_")
    return name if name in POLICY_FIELDS else None


def _as_sources(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return str(value)


def merge_policies(overrides: Optional[Dict[str, Any]] = None) -> PolicySet:
    """Overlay user values onto the all-empty defaults. User values win."""
    values: Dict[str, str] = {}
    for key, value in (overrides or {}).items():
        name = directive_field(str(key))
        if name is None:
            warn(f"Ignoring unknown policy directive '{key}'")
            continue
        values[name] = _as_sources(value)
    return PolicySet(**values)


def parse_policy_assignments(items: Iterable[str]) -> Dict[str, str]:
    """Parse `directive=value` pairs as given on the command line."""
    out: Dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"Expected DIRECTIVE=VALUE, got '{item}'")
        out[key.strip()] = value.strip()
    return out


def load_config_file(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Read a YAML config with the plugin inputs (buildDir, exclude, policies,
    setAllPolicies, append). An explicit path must exist; the default one
    is optional.
    """
    explicit = path is not None
    p = Path(path if explicit else config.CONFIG_PATH)
    if not p.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {p}")
        return {}
    with open(p, "r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"{p}: invalid YAML ({e})") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{p}: expected a mapping at the top level")

    out: Dict[str, Any] = {}
    for key, value in data.items():
        name = _INPUT_KEYS.get(str(key))
        if name is None:
            warn(f"{p}: unknown key '{key}'")
            continue
        out[name] = value
    return out


def _as_flag(value: Any) -> bool:
    # quoted YAML values ("false") arrive as strings
    if isinstance(value, str):
        return config.truthy(value)
    return bool(value)


def _as_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def load_inputs(
    config_path: Optional[str] = None,
    build_dir: Optional[str] = None,
    exclude: Optional[Iterable[str]] = None,
    policies: Optional[Dict[str, Any]] = None,
    set_all_policies: Optional[bool] = None,
    append: Optional[bool] = None,
) -> Inputs:
    """
    Resolve run inputs: environment defaults, then the YAML config file,
    then explicit arguments. Exclusions from the file and the arguments are
    combined; for everything else the later layer wins.
    """
    file_data = load_config_file(config_path)

    resolved_dir = build_dir or file_data.get("build_dir") or config.BUILD_DIR
    if not resolved_dir:
        raise ConfigError("No build directory given (buildDir / CSP_BUILD_DIR / --build-dir)")

    file_policies = file_data.get("policies") or {}
    if not isinstance(file_policies, dict):
        raise ConfigError("'policies' must be a mapping of directive to sources")

    if set_all_policies is None:
        set_all_policies = _as_flag(file_data.get("set_all_policies", config.SET_ALL_POLICIES))
    if append is None:
        append = _as_flag(file_data.get("append", config.HEADERS_APPEND))

    return Inputs(
        build_dir=str(resolved_dir),
        exclude=tuple(_as_list(file_data.get("exclude")) + _as_list(exclude)),
        policies=merge_policies({**file_policies, **(policies or {})}),
        set_all_policies=set_all_policies,
        append=append,
    )
