"""Identifier derivation for mode literals.

Literals are written in snake or kebab case (``read_only``, ``blue-green``)
and become upper camel case identifiers (``ReadOnly``, ``BlueGreen``). Words
that are common initialisms are upper-cased as a whole, so ``api_server``
becomes ``APIServer``.
"""

import keyword
import re

MODE_SUFFIX = "Mode"

COMMON_INITIALISMS = frozenset(
    {
        "ACL", "API", "ASCII", "CPU", "CSS", "DNS", "EOF", "GUID", "HTML",
        "HTTP", "HTTPS", "ID", "IP", "JSON", "LHS", "QPS", "RAM", "RHS",
        "RPC", "SLA", "SMTP", "SQL", "SSH", "TCP", "TLS", "TTL", "UDP", "UI",
        "UID", "UUID", "URI", "URL", "UTF8", "VM", "XML", "XMPP", "XSRF",
        "XSS",
    }
)

# Words whose casing is not a plain capitalization.
_WORD_EXCEPTIONS = {"oauth": "OAuth"}

_WORD_SEPARATOR_RE = re.compile(r"[_-]")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def camelize(literal: str) -> str:
    """Convert a snake or kebab case literal to upper camel case."""
    result = []
    for word in _WORD_SEPARATOR_RE.split(literal):
        if not word:
            continue
        if word in _WORD_EXCEPTIONS:
            result.append(_WORD_EXCEPTIONS[word])
        elif word.upper() in COMMON_INITIALISMS:
            result.append(word.upper())
        else:
            result.append(word[0].upper() + word[1:])
    return "".join(result)


def constant_name(identifier: str) -> str:
    """Return the constant name for a camel case identifier."""
    return identifier + MODE_SUFFIX


def snake_case(identifier: str) -> str:
    """Convert an upper camel case identifier to snake case.

    ``APIServer`` becomes ``api_server`` and ``ReadOnly`` becomes ``read_only``.
    """
    return _CAMEL_BOUNDARY_RE.sub("_", identifier).lower()


def is_valid_identifier(name: str) -> bool:
    """Check that ``name`` can be used as an identifier in every target."""
    return name.isidentifier() and name.isascii() and not keyword.iskeyword(name)
