"""Descriptor loading: read structured input documents and merge them.

Documents are merged in the order given. Top-level keys are overwritten by
later documents, except ``data`` lists which are concatenated so that mode
entries accumulate across files.
"""

import json
from pathlib import Path
from typing import IO, Any, Dict, Iterable, Union

import yaml

from .errors import InputOutputError, ParseError
from .logging import get_logger

logger = get_logger(__name__)

Source = Union[str, Path, IO[bytes]]

YAML_SUFFIXES = (".yaml", ".yml")


def source_name(source: Source) -> str:
    """Return the name used for ``source`` in messages and the banner."""
    if isinstance(source, (str, Path)):
        return str(source)
    return getattr(source, "name", "<stream>")


def _read(source: Source) -> bytes:
    if isinstance(source, (str, Path)):
        try:
            return Path(source).read_bytes()
        except OSError as e:
            raise InputOutputError(str(source), "read", e.strerror or str(e))
    try:
        return source.read()
    except OSError as e:
        raise InputOutputError(source_name(source), "read", str(e))


def parse_document(raw: bytes, name: str) -> Dict[str, Any]:
    """Parse one document, YAML when ``name`` has a YAML suffix, JSON otherwise."""
    try:
        if name.lower().endswith(YAML_SUFFIXES):
            document = yaml.safe_load(raw)
            if document is None:
                document = {}
        else:
            document = json.loads(raw)
    except (ValueError, yaml.YAMLError) as e:
        raise ParseError(name, str(e))

    if not isinstance(document, dict):
        raise ParseError(name, f"top level must be a mapping, got {type(document).__name__}")
    return document


def merge_documents(target: Dict[str, Any], document: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``document`` into ``target`` in place and return ``target``."""
    for key, value in document.items():
        if key == "data" and isinstance(target.get(key), list) and isinstance(value, list):
            target[key] = target[key] + value
        else:
            target[key] = value
    return target


def load_documents(sources: Iterable[Source]) -> Dict[str, Any]:
    """Read every source and merge them into a single mapping."""
    merged: Dict[str, Any] = {}
    for source in sources:
        name = source_name(source)
        document = parse_document(_read(source), name)
        logger.debug("Loaded descriptor", source=name, keys=sorted(document))
        merge_documents(merged, document)
    return merged
