"""Render a ``ModeModel`` into target-language source with jinja2 templates.

Rendering is pure: the same model and context always produce the same text.
"""

import json
import re
from dataclasses import dataclass, field
from typing import List, Tuple

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from .config import TARGETS
from .errors import ValidationError
from .model import Mode, ModeModel
from .naming import snake_case

GENERATOR_NAME = "gen-mode"

TEMPLATES = {
    "python": "mode_gen.py.j2",
    "go": "mode_gen.go.j2",
}

# package.module:function, with an optional dotted attribute path.
_HOOK_REFERENCE_RE = re.compile(r"^[A-Za-z_]\w*(\.[A-Za-z_]\w*)*:[A-Za-z_]\w*(\.[A-Za-z_]\w*)*$")

GO_KEYWORDS = frozenset(
    {
        "break", "case", "chan", "const", "continue", "default", "defer", "else",
        "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
        "map", "package", "range", "return", "select", "struct", "switch", "type",
        "var",
    }
)

# Top-level names declared by the Go template itself.
GO_RESERVED_NAMES = frozenset({"ENV_MODE", "Mode", "SetMode", "modeName", "init", "os"})


@dataclass
class RenderContext:
    """Header values rendered around the modes."""

    package: str = "main"
    sources: List[str] = field(default_factory=list)
    env_var: str = "MODE"
    target: str = "python"

    def __post_init__(self):
        if self.target not in TARGETS:
            raise ValueError(f"Invalid target: {self.target}")

        if self.target == "go" and (not self.package.isidentifier() or self.package in GO_KEYWORDS):
            raise ValueError(f"Invalid Go package name: {self.package}")


def quote(value: str) -> str:
    """Quote ``value`` as a double-quoted literal valid in Python and Go."""
    return json.dumps(value, ensure_ascii=False)


def comment_line(value: str) -> str:
    """Escape line breaks so ``value`` stays on a single comment line."""
    return value.replace("\\", "\\\\").replace("\r", "\\r").replace("\n", "\\n")


def hook_reference(mode: Mode) -> str:
    """Return the validated hook reference of ``mode``, or an empty string."""
    reference = mode.meta_statement.strip()
    if reference and not _HOOK_REFERENCE_RE.match(reference):
        raise ValidationError(
            f"{mode.literal}.meta", mode.meta_statement, "must be a hook reference module:function"
        )
    return reference


def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("gen_mode", "templates"),
        autoescape=select_autoescape(enabled_extensions=()),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["quote"] = quote
    env.filters["comment_line"] = comment_line
    env.filters["snake_case"] = snake_case
    return env


def _python_modes(model: ModeModel) -> List[Tuple[Mode, str]]:
    predicates = {}
    for mode in model.modes:
        name = snake_case(mode.identifier)
        if name in predicates:
            raise ValidationError(
                f"{mode.literal}.value",
                mode.literal,
                "must derive a unique predicate name",
                predicate=f"is_{name}",
                conflicts_with=predicates[name],
            )
        predicates[name] = mode.literal
    return [(mode, hook_reference(mode)) for mode in model.modes]


def _check_go_names(model: ModeModel) -> None:
    """Reject modes whose constant or predicate redeclares a Go top-level name."""
    declared = {name: "generated code" for name in GO_RESERVED_NAMES}
    for mode in model.modes:
        for name in (mode.constant_name, f"Is{mode.identifier}"):
            if name in declared:
                raise ValidationError(
                    f"{mode.literal}.value",
                    mode.literal,
                    "must derive a unique Go name",
                    name=name,
                    conflicts_with=declared[name],
                )
            declared[name] = mode.literal


def render(model: ModeModel, context: RenderContext) -> str:
    """Render ``model`` for ``context.target`` and return the source text."""
    template = _environment().get_template(TEMPLATES[context.target])

    params = {
        "generator": GENERATOR_NAME,
        "package": context.package,
        "sources": context.sources,
        "env_var": context.env_var,
        "modes": model.modes,
        "default": model.default_constant_name,
    }
    if context.target == "python":
        params["hooked_modes"] = _python_modes(model)
        params["has_hooks"] = any(reference for _, reference in params["hooked_modes"])
    else:
        _check_go_names(model)

    return template.render(**params)
