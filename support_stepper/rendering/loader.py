"""
Message template rendering.

Every name on `Template` must have a `<name>.jinja2` file next to this
module; a missing one stops the import rather than the first request that
needs it. Rendering is strict: a variable the caller forgot to pass raises
instead of printing an empty string into the side panel.
"""

from pathlib import Path
from typing import Any, Set

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .templates import Template

TEMPLATES_DIR = Path(__file__).parent / "templates"
SUFFIX = ".jinja2"

_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    undefined=StrictUndefined,
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
)


def template_names() -> Set[str]:
    return {
        value
        for name, value in vars(Template).items()
        if not name.startswith("_") and isinstance(value, str)
    }


def _check_templates(env: Environment) -> None:
    available = {name[: -len(SUFFIX)] for name in env.list_templates(extensions=[SUFFIX[1:]])}
    missing = sorted(template_names() - available)
    if missing:
        raise FileNotFoundError(
            f"Message templates missing from {TEMPLATES_DIR}: {', '.join(missing)}"
        )


_check_templates(_env)


def render(template_name: str, **context: Any) -> str:
    """Renders `<template_name>.jinja2`; trailing whitespace is dropped."""
    return _env.get_template(template_name + SUFFIX).render(**context).rstrip()
