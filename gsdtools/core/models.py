"""
Model selection for GSD agents.

Each profile maps agent types to a model tier. A per-agent entry in
config.json's model_overrides beats the profile. The top tier ("opus") is
never forced on the caller: it resolves to "inherit", which tells the
spawning environment to use its own default model.
"""

from types import MappingProxyType
from typing import List, Mapping, Optional

from gsdtools.core import PathLike
from gsdtools.core.config import ResolvedConfig, load_config

DEFAULT_PROFILE = "balanced"
DEFAULT_MODEL = "sonnet"
HIGH_TIER_MODEL = "opus"
INHERIT_MODEL = "inherit"

MODEL_PROFILES: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "quality": MappingProxyType({
        "gsd-planner": "opus",
        "gsd-roadmapper": "opus",
        "gsd-executor": "opus",
        "gsd-phase-researcher": "opus",
        "gsd-project-researcher": "opus",
        "gsd-research-synthesizer": "sonnet",
        "gsd-debugger": "opus",
        "gsd-codebase-mapper": "sonnet",
        "gsd-verifier": "sonnet",
        "gsd-plan-checker": "sonnet",
        "gsd-integration-checker": "sonnet",
    }),
    "balanced": MappingProxyType({
        "gsd-planner": "opus",
        "gsd-roadmapper": "sonnet",
        "gsd-executor": "sonnet",
        "gsd-phase-researcher": "sonnet",
        "gsd-project-researcher": "sonnet",
        "gsd-research-synthesizer": "sonnet",
        "gsd-debugger": "sonnet",
        "gsd-codebase-mapper": "haiku",
        "gsd-verifier": "sonnet",
        "gsd-plan-checker": "sonnet",
        "gsd-integration-checker": "sonnet",
    }),
    "budget": MappingProxyType({
        "gsd-planner": "sonnet",
        "gsd-roadmapper": "sonnet",
        "gsd-executor": "sonnet",
        "gsd-phase-researcher": "haiku",
        "gsd-project-researcher": "haiku",
        "gsd-research-synthesizer": "haiku",
        "gsd-debugger": "sonnet",
        "gsd-codebase-mapper": "haiku",
        "gsd-verifier": "haiku",
        "gsd-plan-checker": "haiku",
        "gsd-integration-checker": "haiku",
    }),
})

# All supported agent types
AGENT_TYPES: List[str] = list(MODEL_PROFILES[DEFAULT_PROFILE].keys())


def get_profile_model(profile: str, agent_type: str) -> str:
    """Model an agent gets under a profile, before any inherit mapping.

    Unknown profiles use the balanced table; unknown agents get
    DEFAULT_MODEL.
    """
    table = MODEL_PROFILES.get(profile, MODEL_PROFILES[DEFAULT_PROFILE])
    return table.get(agent_type, DEFAULT_MODEL)


def resolve_model_for_config(config: ResolvedConfig, agent_type: str) -> str:
    """Resolve the model for an agent from an already loaded config."""
    overrides = config.model_overrides or {}
    override = overrides.get(agent_type)
    if isinstance(override, str) and override:
        candidate = override
    else:
        candidate = get_profile_model(config.model_profile, agent_type)
    if candidate == HIGH_TIER_MODEL:
        return INHERIT_MODEL
    return candidate


def resolve_model(
    project_path: PathLike,
    agent_type: str,
    config: Optional[ResolvedConfig] = None,
) -> str:
    """Resolve the model for an agent in a project.

    Args:
        project_path: Project root
        agent_type: Agent name (e.g. "gsd-planner")
        config: Pre-loaded config; loaded from disk when omitted

    Returns:
        Model name ("sonnet", "haiku", ...) or "inherit" for the top tier
    """
    if config is None:
        config = load_config(project_path)
    return resolve_model_for_config(config, agent_type)
