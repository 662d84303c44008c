"""Configuration diff engine.

Compares two or more configuration snapshots key by key. Values are compared
through the normalizer pipeline, but the report always carries the raw
values so operators see the original spellings.

Sources do not all enumerate the same universe of keys. A live server reports
every variable it knows and a defaults listing reports every variable with a
default, while an option file only holds what someone explicitly set. Without
a skip policy every unset server variable would show up as missing from the
option file. The policy decides when a key present on one side only is a real
difference:

    holder kind | other kind | reported?
    ------------+------------+----------------------------------
    file        | anything   | yes
    live        | file       | no
    live        | defaults   | no
    defaults    | file       | no
    defaults    | live       | no
    live        | live       | yes, unless report_like_kinds=False
    defaults    | defaults   | yes, unless report_like_kinds=False
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from .models import MISSING, ConfigSource, DiffReport, SourceKind
from .normalizer import NormalizerPipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkipPolicy:
    """Decides whether a key present on one side only is reported."""

    universe_kinds: frozenset[SourceKind] = field(
        default_factory=lambda: frozenset({SourceKind.LIVE, SourceKind.DEFAULTS})
    )
    report_like_kinds: bool = True

    def suppresses(self, holder: SourceKind, other: SourceKind) -> bool:
        """Check whether a key held only by ``holder`` should be skipped.

        Args:
            holder: Kind of the source that has the key
            other: Kind of the source the key is missing from

        Returns:
            True when the absence is an artifact of ``holder`` enumerating a
            wider key universe than ``other``
        """
        if holder not in self.universe_kinds:
            return False
        if holder == other:
            return not self.report_like_kinds
        return True


class DiffEngine:
    """Compute key-level differences between configuration snapshots."""

    def __init__(
        self,
        normalizer: NormalizerPipeline | None = None,
        policy: SkipPolicy | None = None,
    ):
        self.normalizer = normalizer or NormalizerPipeline()
        self.policy = policy or SkipPolicy()

    def compare(self, configs: Sequence[ConfigSource]) -> DiffReport:
        """Compare the first config against every later one.

        Results of all pairs are merged into one report. When two pairs
        disagree on the same key the later pair wins.

        Args:
            configs: Snapshots to compare, the first one is the base

        Returns:
            Report mapping variable name to ``[base value, other value]``;
            empty when fewer than two configs are given
        """
        if len(configs) < 2:
            logger.debug(
                "Nothing to compare", extra={"config_count": len(configs)}
            )
            return {}

        base = configs[0]
        report: DiffReport = {}
        for other in configs[1:]:
            report.update(self.compare_pair(base, other))
        return report

    def compare_pair(self, first: ConfigSource, second: ConfigSource) -> DiffReport:
        """Compare two snapshots.

        Args:
            first: Base snapshot, its values fill the first report slot
            second: Compared snapshot, its values fill the second slot

        Returns:
            Report mapping variable name to ``[first value, second value]``
        """
        report: DiffReport = {}
        skip_first_only = self.policy.suppresses(first.kind, second.kind)
        skip_second_only = self.policy.suppresses(second.kind, first.kind)

        for name, first_value in first.items():
            second_value, present = second.lookup(name)
            if not present:
                if skip_first_only:
                    logger.debug(
                        "Skipping key missing from narrower source",
                        extra={"key": name, "holder": first.kind.value},
                    )
                else:
                    report[name] = [first_value, MISSING]
                continue

            if self.normalizer(first_value) != self.normalizer(second_value):
                report[name] = [first_value, second_value]

        for name, second_value in second.items():
            _, present = first.lookup(name)
            if present:
                continue
            if skip_second_only:
                logger.debug(
                    "Skipping key missing from narrower source",
                    extra={"key": name, "holder": second.kind.value},
                )
            else:
                report[name] = [MISSING, second_value]

        logger.debug(
            "Compared configuration pair",
            extra={
                "first_kind": first.kind.value,
                "second_kind": second.kind.value,
                "differences": len(report),
            },
        )
        return report


_default_engine = DiffEngine()


def compare(
    configs: Sequence[ConfigSource], *, policy: SkipPolicy | None = None
) -> DiffReport:
    """Compare snapshots with the default normalizer pipeline.

    Args:
        configs: Snapshots to compare, the first one is the base
        policy: Optional skip policy overriding the default one

    Returns:
        Merged diff report, empty when fewer than two configs are given
    """
    engine = _default_engine if policy is None else DiffEngine(policy=policy)
    return engine.compare(configs)
