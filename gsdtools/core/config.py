"""
Project configuration for GSD workflows.

Settings live in .planning/config.json. Any key may appear at the top
level or under its section (planning.*, git.*, workflow.*); the top level
wins. A missing or unparseable file yields pure defaults, and a key with
the wrong type falls back to its own default without touching siblings.

Example config.json:
    {
        "model_profile": "quality",
        "parallelization": {"enabled": false},
        "planning": {"commit_docs": false},
        "git": {"branching_strategy": "phase"},
        "model_overrides": {"gsd-executor": "haiku"}
    }
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple

from gsdtools.core import CONFIG_PATH, PathLike, safe_read_file

logger = logging.getLogger(__name__)

# Type aliases
ModelProfile = Literal["quality", "balanced", "budget"]
BranchingStrategy = Literal["none", "phase", "milestone"]

# Option name -> (section, field) it may also be nested under
NESTED_KEYS: Dict[str, Tuple[str, str]] = {
    "commit_docs": ("planning", "commit_docs"),
    "search_gitignored": ("planning", "search_gitignored"),
    "branching_strategy": ("git", "branching_strategy"),
    "phase_branch_template": ("git", "phase_branch_template"),
    "milestone_branch_template": ("git", "milestone_branch_template"),
    "research": ("workflow", "research"),
    "plan_checker": ("workflow", "plan_check"),
    "verifier": ("workflow", "verifier"),
}

_MISSING = object()


@dataclass(frozen=True)
class ResolvedConfig:
    """Flat view of .planning/config.json with every default applied."""
    model_profile: ModelProfile = "balanced"
    commit_docs: bool = True
    search_gitignored: bool = False
    branching_strategy: BranchingStrategy = "none"
    phase_branch_template: str = "gsd/phase-{phase}-{slug}"
    milestone_branch_template: str = "gsd/{milestone}-{slug}"
    research: bool = True
    plan_checker: bool = True
    verifier: bool = True
    parallelization: bool = True
    brave_search: bool = False
    # None when config.json has no model_overrides object
    model_overrides: Optional[Dict[str, Any]] = field(default=None)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResolvedConfig":
        """Build a config from a parsed config.json document.

        Args:
            data: Parsed JSON object

        Returns:
            ResolvedConfig with per-field defaults for absent or mistyped keys
        """
        defaults = cls()
        values: Dict[str, Any] = {}

        for name, default in asdict(defaults).items():
            if name in ("parallelization", "model_overrides"):
                continue
            raw = _lookup(data, name, type(default))
            if raw is not _MISSING:
                values[name] = raw

        values["parallelization"] = _parallelization(data, defaults.parallelization)
        values["model_overrides"] = _model_overrides(data)
        return cls(**values)


def _lookup(data: Dict[str, Any], name: str, expected: type) -> Any:
    """Top-level key first, then the nested section key, else _MISSING.

    A value of the wrong type is skipped, so a mistyped top-level key
    does not hide a valid nested one.
    """
    candidates = [("", data.get(name))]
    nested = NESTED_KEYS.get(name)
    if nested:
        section = data.get(nested[0])
        if isinstance(section, dict):
            candidates.append((f"{nested[0]}.", section.get(nested[1])))

    for prefix, value in candidates:
        if value is None:
            continue
        if isinstance(value, expected):
            return value
        logger.debug(f"Ignoring config key {prefix}{name}: expected {expected.__name__}, got {value!r}")

    return _MISSING


def _parallelization(data: Dict[str, Any], default: bool) -> bool:
    """parallelization may be a bool or {"enabled": bool}."""
    value = data.get("parallelization")
    if isinstance(value, bool):
        return value
    if isinstance(value, dict) and isinstance(value.get("enabled"), bool):
        return value["enabled"]
    return default


def _model_overrides(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """The model_overrides object as written; None unless it is an object."""
    overrides = data.get("model_overrides")
    return overrides if isinstance(overrides, dict) else None


def get_config_path(project_path: PathLike) -> Path:
    """Get the config file path for a project."""
    return Path(project_path) / CONFIG_PATH


def load_config(project_path: PathLike) -> ResolvedConfig:
    """Load project configuration. Returns defaults if missing or malformed."""
    config_file = get_config_path(project_path)
    raw = safe_read_file(config_file)
    if raw is None:
        return ResolvedConfig()

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.debug(f"Malformed {config_file}, using defaults: {e}")
        return ResolvedConfig()

    if not isinstance(data, dict):
        logger.debug(f"{config_file} is not a JSON object, using defaults")
        return ResolvedConfig()

    return ResolvedConfig.from_dict(data)


def get_config_value(config: ResolvedConfig, key: str) -> Any:
    """Look up a resolved option, following dots into model_overrides.

    Args:
        config: Resolved configuration
        key: Option name ("commit_docs") or "model_overrides.<agent>"

    Returns:
        The value, or None if the key is unknown
    """
    head, _, rest = key.partition(".")
    value = config.to_dict().get(head)
    if rest:
        return value.get(rest) if isinstance(value, dict) else None
    return value
