"""Value normalization pipeline.

Configuration values reach the diff engine in many spellings: ``512M`` in an
option file and ``536870912`` from the server, ``ON`` versus ``1``, ``10.0``
versus ``10``, flag sets in any order. The pipeline maps every raw value to a
canonical string so that equivalent spellings compare equal.

Every stage is a pure function of a single string and returns its input
unchanged when it does not recognize the pattern, so normalization is total.
Stage order matters: sizes are expanded before numeric canonicalization so an
expanded byte count is formatted exactly like a server-reported one.
"""

import math
import re
from collections.abc import Callable, Sequence
from typing import Any

Stage = Callable[[str], str]

SIZE_MULTIPLIERS = {
    "K": 1024,
    "M": 1024**2,
    "G": 1024**3,
    "T": 1024**4,
}

TRUE_SPELLINGS = frozenset({"yes", "on", "true"})
FALSE_SPELLINGS = frozenset({"no", "off", "false"})

_SIZE_PATTERN = re.compile(r"(\d*)([KMGT])", re.IGNORECASE | re.ASCII)
_NUMBER_PATTERN = re.compile(
    r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII
)


def as_text(value: Any) -> str:
    """Render a raw value as the text the pipeline works on."""
    if value is None:
        return ""
    if isinstance(value, bytes | bytearray):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def expand_size_suffix(value: str) -> str:
    """Expand a K/M/G/T size suffix into a byte count.

    ``"512M"`` becomes ``"536870912"``. An empty numeric part counts as zero,
    so ``"K"`` becomes ``"0"``. Fractions (``"1.5M"``) and other suffixes
    (``"3F"``) are left untouched.
    """
    match = _SIZE_PATTERN.fullmatch(value)
    if not match:
        return value

    digits, unit = match.groups()
    number = int(digits) if digits else 0
    return str(number * SIZE_MULTIPLIERS[unit.upper()])


def canonicalize_boolean(value: str) -> str:
    """Map yes/on/true to ``"1"`` and no/off/false to ``"0"``."""
    lowered = value.lower()
    if lowered in TRUE_SPELLINGS:
        return "1"
    if lowered in FALSE_SPELLINGS:
        return "0"
    return value


def canonicalize_number(value: str) -> str:
    """Format a decimal number with zero decimal places.

    ``"10.0"``, ``"0010.000"`` and ``"10"`` all become ``"10"``. Text that is
    not entirely a finite decimal literal passes through, which keeps
    ``"NaN"`` and ``"inf"`` as they are.
    """
    if not _NUMBER_PATTERN.fullmatch(value):
        return value

    number = float(value)
    if not math.isfinite(number):
        return value
    formatted = f"{number:.0f}"
    if formatted == "-0":
        # -0.4 and 0 are the same setting
        return "0"
    return formatted


def canonicalize_set(value: str) -> str:
    """Sort the members of a comma-separated set."""
    if "," not in value:
        return value
    return ",".join(sorted(value.split(",")))


DEFAULT_STAGES: tuple[Stage, ...] = (
    expand_size_suffix,
    canonicalize_boolean,
    canonicalize_number,
    canonicalize_set,
)


class NormalizerPipeline:
    """An ordered list of normalization stages applied in sequence."""

    def __init__(self, stages: Sequence[Stage] | None = None):
        self.stages: tuple[Stage, ...] = tuple(
            DEFAULT_STAGES if stages is None else stages
        )

    def __call__(self, value: Any) -> str:
        return self.normalize(value)

    def normalize(self, value: Any) -> str:
        """Normalize a raw value to its comparison-canonical string."""
        text = as_text(value)
        for stage in self.stages:
            text = stage(text)
        return text

    def equivalent(self, left: Any, right: Any) -> bool:
        """Check whether two raw values normalize to the same string."""
        return self.normalize(left) == self.normalize(right)

    def __repr__(self) -> str:
        names = ", ".join(getattr(s, "__name__", repr(s)) for s in self.stages)
        return f"NormalizerPipeline([{names}])"


_default_pipeline = NormalizerPipeline()


def normalize(value: Any) -> str:
    """Normalize a value with the default pipeline."""
    return _default_pipeline.normalize(value)
