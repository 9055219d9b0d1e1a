"""
gsdtools - Resolution core for the GSD planning CLI helper.

Reads a project's .planning tree and turns identifiers into facts:
- Phase numbers and names -> phase directories and roadmap sections
- Agent names -> model identifiers (profile table + overrides)
- Pending todos, milestones and archives -> counts and records

Every command emits one flat JSON record. Nothing here writes to
.planning; missing or malformed files degrade to defaults.
"""

__version__ = "0.1.0"
