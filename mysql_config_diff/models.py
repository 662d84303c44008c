"""Canonical configuration snapshots and the diff report types.

A ``CanonicalConfig`` is what every reader produces and what the diff engine
consumes: a source kind tag plus a read-only mapping of variable name to raw
value. The engine only depends on the ``ConfigSource`` protocol, so any
object exposing the same four capabilities can be compared.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

MISSING = "<Missing>"

# name -> [value from first source, value from second source]
DiffReport = dict[str, list[Any]]


class SourceKind(str, Enum):
    """Kinds of configuration sources.

    ``file`` holds only explicitly set options, ``live`` enumerates every
    variable a running server knows, ``defaults`` enumerates every variable
    with its compiled-in default.
    """

    FILE = "file"
    LIVE = "live"
    DEFAULTS = "defaults"

    @classmethod
    def from_label(cls, label: "str | SourceKind") -> "SourceKind":
        """Coerce a label to a kind, accepting the older cnf/mysql names."""
        if isinstance(label, cls):
            return label
        normalized = str(label).strip().lower()
        normalized = _KIND_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(kind.value for kind in cls)
            raise ValueError(
                f"Unknown source kind '{label}', expected one of: {valid}"
            ) from None

    @property
    def enumerates_universe(self) -> bool:
        """Whether this kind reports every known variable, set or not."""
        return self is not SourceKind.FILE


_KIND_ALIASES = {"cnf": "file", "mysql": "live"}


@runtime_checkable
class ConfigSource(Protocol):
    """Capabilities the diff engine needs from a configuration source."""

    @property
    def kind(self) -> SourceKind: ...

    def keys(self) -> Iterable[str]: ...

    def lookup(self, name: str) -> tuple[Any, bool]: ...

    def items(self) -> Iterable[tuple[str, Any]]: ...


@dataclass(frozen=True)
class CanonicalConfig:
    """Immutable snapshot of one configuration source."""

    kind: SourceKind
    entries: Mapping[str, Any] = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", SourceKind.from_label(self.kind))
        # Copy so later changes to the producer's dict never leak in
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def keys(self) -> list[str]:
        """Get all variable names in this snapshot."""
        return list(self.entries.keys())

    def lookup(self, name: str) -> tuple[Any, bool]:
        """Get a value by name together with a presence flag."""
        if name in self.entries:
            return self.entries[name], True
        return None, False

    def items(self) -> list[tuple[str, Any]]:
        """Get all (name, value) pairs in this snapshot."""
        return list(self.entries.items())

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def describe(self) -> str:
        """Short human-readable label for logs and messages."""
        if self.source:
            return f"{self.kind.value}:{self.source}"
        return self.kind.value
