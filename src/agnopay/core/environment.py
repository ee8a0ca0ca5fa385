"""
Where ``AGNOPAY_*`` settings come from.

Lookups go through three sources, strongest first:

1. ``overrides`` passed by the caller (CLI ``--set``, tests);
2. ``base``, normally the live process environment;
3. a dotenv file, consulted only for keys the first two lack.

The same ``.env`` a Next.js front-end reads (``NEXT_PUBLIC_AGNOPAY_KEY`` and
friends) can be pointed at directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Mapping, MutableMapping, Optional, Tuple

_EXPORT_PREFIX = "export "
_QUOTES = ("'", '"')


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def _dotenv_pairs(text: str) -> Iterator[Tuple[str, str]]:
    for raw in text.splitlines():
        entry = raw.strip()
        if entry.startswith("#"):
            continue
        if entry.startswith(_EXPORT_PREFIX):
            entry = entry[len(_EXPORT_PREFIX):].lstrip()
        name, sep, value = entry.partition("=")
        name = name.strip()
        if not sep or not name:
            continue
        yield name, _unquote(value.strip())


def read_dotenv(path: str) -> Dict[str, str]:
    """Return the assignments in ``path``; a missing file reads as empty."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    return dict(_dotenv_pairs(text))


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Copy dotenv assignments into ``environ`` (default :data:`os.environ`)
    without clobbering keys it already holds. Returns a snapshot of the result.
    """
    target = os.environ if environ is None else environ
    for name, value in read_dotenv(path).items():
        if name not in target:
            target[name] = value
    return dict(target)


@dataclass(frozen=True)
class SDKEnvironment:
    """Flattened view over the configured sources."""

    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)

    def first(self, *keys: str) -> Optional[str]:
        """Value of the first key in ``keys`` that is set and non-empty."""
        return next((self.variables[k] for k in keys if self.variables.get(k)), None)


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> SDKEnvironment:
    """
    Resolve settings from ``overrides``, ``base`` and ``env_file``.

    ``base=None`` means the current process environment; ``env_file=None``
    skips the dotenv lookup.
    """
    variables: Dict[str, str] = read_dotenv(env_file) if env_file is not None else {}
    variables.update(os.environ if base is None else base)
    variables.update(overrides or {})
    return SDKEnvironment(variables=variables)
