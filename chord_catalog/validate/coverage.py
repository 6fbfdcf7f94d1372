"""Root x quality coverage matrix.

Advisory report: which canonical ids the catalog is expected to contain but
does not, ranked by how much the missing quality matters, and which observed
ids fall outside the expected matrix.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from chord_catalog.config import QUALITY_ORDER, QUALITY_SEVERITY, ROOT_ORDER, SEVERITY_LEVELS
from chord_catalog.models import as_record

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from chord_catalog.config import Severity
    from chord_catalog.models import CanonicalChord


@dataclass(frozen=True)
class MissingChord:
    """An expected canonical id absent from the catalog.

    Parameters
    ----------
    canonical_id : str
        The missing id.
    severity : Severity
        Importance derived from the quality.
    tags : tuple[str, ...]
        ``severity:<level>`` and ``quality:<quality>``.
    """

    canonical_id: str
    severity: Severity
    tags: tuple[str, ...]


@dataclass(frozen=True)
class CoverageReport:
    """Result of :func:`build_coverage_report`."""

    expected_combinations: int
    observed_combinations: int
    coverage_percent: float
    missing_canonical_ids: tuple[str, ...]
    missing_tagged: tuple[MissingChord, ...]
    missing_severity_counts: dict[str, int]
    unexpected_canonical_ids: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "expected_combinations": self.expected_combinations,
            "observed_combinations": self.observed_combinations,
            "coverage_percent": self.coverage_percent,
            "missing_canonical_ids": list(self.missing_canonical_ids),
            "missing_tagged": [
                {"canonical_id": m.canonical_id, "severity": m.severity, "tags": list(m.tags)}
                for m in self.missing_tagged
            ],
            "missing_severity_counts": dict(self.missing_severity_counts),
            "unexpected_canonical_ids": list(self.unexpected_canonical_ids),
        }


def severity_for(quality: str) -> Severity:
    """Severity of a missing chord of ``quality``; unlisted qualities are low."""
    return QUALITY_SEVERITY.get(quality, "low")


def build_coverage_report(
    chords: Iterable[CanonicalChord | Mapping[str, Any]],
    roots: Sequence[str] = ROOT_ORDER,
    qualities: Sequence[str] = QUALITY_ORDER,
) -> CoverageReport:
    """Diff observed canonical ids against the roots x qualities matrix.

    Parameters
    ----------
    chords : Iterable[CanonicalChord | Mapping[str, Any]]
        Catalog records. Duplicate ids count once.
    roots : Sequence[str]
        Expected roots, in report order.
    qualities : Sequence[str]
        Expected qualities, in report order.

    Returns
    -------
    CoverageReport
        Missing ids in root-major order, unexpected ids sorted.

    Examples
    --------
    >>> report = build_coverage_report([{"id": "chord:C:maj"}], roots=["C"], qualities=["maj", "min"])
    >>> report.coverage_percent
    50.0
    >>> report.missing_canonical_ids
    ('chord:C:min',)
    """
    roots = list(dict.fromkeys(roots))
    qualities = list(dict.fromkeys(qualities))
    observed = {as_record(chord)["id"] for chord in chords}

    grid = np.zeros((len(roots), len(qualities)), dtype=bool)
    expected: set[str] = set()
    for i, root in enumerate(roots):
        for j, quality in enumerate(qualities):
            chord_id = f"chord:{root}:{quality}"
            expected.add(chord_id)
            grid[i, j] = chord_id in observed

    missing: list[MissingChord] = []
    for i, j in zip(*np.nonzero(~grid)):
        quality = qualities[j]
        severity = severity_for(quality)
        missing.append(
            MissingChord(
                canonical_id=f"chord:{roots[i]}:{quality}",
                severity=severity,
                tags=(f"severity:{severity}", f"quality:{quality}"),
            )
        )

    counts = {level: 0 for level in SEVERITY_LEVELS}
    for entry in missing:
        counts[entry.severity] += 1

    expected_count = int(grid.size)
    observed_count = int(grid.sum())
    percent = 100.0 if expected_count == 0 else round(observed_count / expected_count * 100, 2)

    return CoverageReport(
        expected_combinations=expected_count,
        observed_combinations=observed_count,
        coverage_percent=percent,
        missing_canonical_ids=tuple(m.canonical_id for m in missing),
        missing_tagged=tuple(missing),
        missing_severity_counts=counts,
        unexpected_canonical_ids=tuple(sorted(observed - expected)),
    )


def format_coverage_report(report: CoverageReport) -> str:
    """Render a coverage report as Markdown."""
    lines = [
        "# Root x Quality Coverage",
        "",
        f"Covered {report.observed_combinations} of {report.expected_combinations} "
        f"combinations ({report.coverage_percent}%).",
        "",
        "## Missing",
        "",
    ]
    if report.missing_tagged:
        lines.extend(["| Id | Severity |", "|----|----------|"])
        lines.extend(f"| {m.canonical_id} | {m.severity} |" for m in report.missing_tagged)
    else:
        lines.append("_No missing chords._")
    lines.extend(["", "## Unexpected", ""])
    if report.unexpected_canonical_ids:
        lines.extend(f"- {chord_id}" for chord_id in report.unexpected_canonical_ids)
    else:
        lines.append("_No unexpected chords._")
    lines.append("")
    return "\n".join(lines)
