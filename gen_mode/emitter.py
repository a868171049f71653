"""Format generated source and write it to its output location.

The file is written to a temporary sibling first and moved into place, so a
failed run never leaves a partial file behind.
"""

import os
import re
import sys
import tempfile
from pathlib import Path
from typing import Optional, Union

from .errors import InputOutputError, ValidationError
from .logging import get_logger

logger = get_logger(__name__)

OUTPUT_BASENAME = "mode_gen"
EXTENSIONS = {
    "python": ".py",
    "go": ".go",
}

_TRAILING_WS_RE = re.compile(r"[ \t]+$", re.MULTILINE)
_BLANK_RUN_RE = re.compile(r"\n{4,}")


def default_output_name(target: str) -> str:
    return (OUTPUT_BASENAME + EXTENSIONS[target]).lower()


def resolve_output_path(
    output: Optional[Union[str, Path]] = None,
    path: Optional[Union[str, Path]] = None,
    target: str = "python",
) -> Path:
    """Resolve where generated source goes.

    An explicit ``output`` wins. Otherwise the default file name is placed in
    ``path`` (made absolute), or next to the running generator program.
    """
    if output:
        return Path(output)
    if path:
        directory = Path(path).resolve()
    else:
        directory = Path(sys.argv[0]).resolve().parent
    return directory / default_output_name(target)


def format_source(source: str, target: str = "python", filename: str = "<generated>") -> str:
    """Apply canonical whitespace and, for Python, check the syntax."""
    formatted = _TRAILING_WS_RE.sub("", source)
    formatted = _BLANK_RUN_RE.sub("\n\n\n", formatted)
    formatted = formatted.strip("\n") + "\n"

    if target == "python":
        try:
            compile(formatted, filename, "exec")
        except SyntaxError as e:
            raise ValidationError("generated source", filename, f"must be valid Python: {e.msg}", line=e.lineno)
    return formatted


def write_atomic(destination: Path, content: str):
    """Write ``content`` to ``destination`` through a temporary file."""
    directory = destination.parent
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{destination.name}.", dir=directory)
    except OSError as e:
        raise InputOutputError(str(destination), "write", e.strerror or str(e))

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, destination)
    except OSError as e:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise InputOutputError(str(destination), "write", e.strerror or str(e))


def emit(source: str, destination: Path, target: str = "python") -> str:
    """Format ``source``, write it to ``destination`` and return the written text."""
    formatted = format_source(source, target, str(destination))
    write_atomic(destination, formatted)
    logger.info("Wrote generated source", output=str(destination), bytes=len(formatted.encode("utf-8")))
    return formatted
