"""Mode model: validated, ordered modes plus the resolved default.

``build_model`` turns the merged descriptor document into a ``ModeModel``.
Entries are processed in document order. The first entry with a given literal
wins, the last entry claiming ``default`` wins, and the first mode is the
default when no entry claims it.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator

from .errors import ValidationError
from .logging import get_logger
from .naming import camelize, constant_name, is_valid_identifier

logger = get_logger(__name__)


class Mode(BaseModel):
    """A single mode derived from one descriptor entry."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    constant_name: str
    literal: str
    meta_statement: str = ""


class ModeModel(BaseModel):
    """All modes in descriptor order and the constant name of the default."""

    model_config = ConfigDict(frozen=True)

    modes: Tuple[Mode, ...]
    default_constant_name: str

    @model_validator(mode="after")
    def check_default(self):
        if not self.modes:
            raise ValueError("a mode model needs at least one mode")
        if self.default_constant_name not in self.constant_names:
            raise ValueError(f"default {self.default_constant_name} is not a known mode")
        return self

    @property
    def constant_names(self) -> List[str]:
        return [mode.constant_name for mode in self.modes]

    @property
    def default_mode(self) -> Mode:
        """Return the mode selected when no environment override is given."""
        for mode in self.modes:
            if mode.constant_name == self.default_constant_name:
                return mode
        raise LookupError(self.default_constant_name)

    def get(self, literal: str) -> Optional[Mode]:
        for mode in self.modes:
            if mode.literal == literal:
                return mode
        return None


def derive_mode(entry: Mapping[str, Any], index: int) -> Mode:
    """Validate one descriptor entry and derive its ``Mode``."""
    field = f"data[{index}]"

    literal = entry.get("value")
    if not isinstance(literal, str) or not literal:
        raise ValidationError(f"{field}.value", literal, "must be a non-empty string")

    identifier = camelize(literal)
    name = constant_name(identifier)
    if not identifier or not is_valid_identifier(name):
        raise ValidationError(
            f"{field}.value", literal, "must derive a valid identifier", constant_name=name
        )

    meta = entry.get("meta", "")
    if meta is None:
        meta = ""
    if not isinstance(meta, str):
        raise ValidationError(f"{field}.meta", meta, "must be a string")

    return Mode(identifier=identifier, constant_name=name, literal=literal, meta_statement=meta)


def build_model(document: Mapping[str, Any]) -> ModeModel:
    """Build the validated ``ModeModel`` from a merged descriptor document.

    Raises:
        ValidationError: ``data`` is missing, not a list, empty, or holds an
            invalid entry.
    """
    data = document.get("data")
    if data is None:
        raise ValidationError("data", data, "is required")
    if not isinstance(data, list):
        raise ValidationError("data", type(data).__name__, "must be a list of mode entries")
    if not data:
        raise ValidationError("data", data, "must contain at least one mode")

    modes: List[Mode] = []
    by_literal: Dict[str, Mode] = {}
    by_constant: Dict[str, Mode] = {}
    default: Optional[str] = None

    for index, entry in enumerate(data):
        if not isinstance(entry, Mapping):
            raise ValidationError(f"data[{index}]", entry, "must be a mapping")

        mode = derive_mode(entry, index)

        if mode.literal in by_literal:
            logger.warning("Dropping duplicate mode", literal=mode.literal, index=index)
            mode = by_literal[mode.literal]
        elif mode.constant_name in by_constant:
            raise ValidationError(
                f"data[{index}].value",
                mode.literal,
                "must derive a unique constant name",
                constant_name=mode.constant_name,
                conflicts_with=by_constant[mode.constant_name].literal,
            )
        else:
            modes.append(mode)
            by_literal[mode.literal] = mode
            by_constant[mode.constant_name] = mode

        is_default = entry.get("default")
        if is_default is None:
            is_default = False
        if not isinstance(is_default, bool):
            raise ValidationError(f"data[{index}].default", is_default, "must be a boolean")
        if is_default:
            if default is not None and default != mode.constant_name:
                logger.debug("Default overridden", previous=default, current=mode.constant_name)
            default = mode.constant_name

    if default is None:
        default = modes[0].constant_name

    logger.info("Built mode model", modes=len(modes), default=default)
    return ModeModel(modes=tuple(modes), default_constant_name=default)
