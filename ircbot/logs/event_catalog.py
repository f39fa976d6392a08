"""(domain, action) -> message template lookup used by ``BotLogger``.

Templates live in ``event_templates.json`` next to this module, one object
per domain mapping action names to ``str.format`` templates.
"""

from __future__ import annotations

import json
from pathlib import Path

TEMPLATES_PATH = Path(__file__).with_name("event_templates.json")

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def load_event_templates(path: Path = TEMPLATES_PATH) -> dict[tuple[str, str], str]:
    """Read the template file into a flat ``{(domain, action): template}`` map.

    Non-string entries are ignored. When the file cannot be used the map holds
    only ``("app", "load_error")`` describing why.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {("app", "load_error"): f"Event templates file missing: {path.name}"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Event templates unreadable: {e}"[:200]}
    if not isinstance(raw, dict):
        return {}
    return {
        (domain, action): template
        for domain, actions in raw.items()
        if isinstance(actions, dict)
        for action, template in actions.items()
        if isinstance(template, str)
    }


def reload_event_templates(path: Path = TEMPLATES_PATH) -> None:
    """Re-read the template file; existing references see the new entries."""
    templates = load_event_templates(path)
    EVENT_TEMPLATES.clear()
    EVENT_TEMPLATES.update(templates)


reload_event_templates()

__all__ = [
    "EVENT_TEMPLATES",
    "TEMPLATES_PATH",
    "load_event_templates",
    "reload_event_templates",
]
