"""Enharmonic equivalence symmetry report.

Equivalences are meant to be mutual: if chord A lists chord B, chord B
should list chord A. The merge engine derives one link per record
independently, so symmetry is not guaranteed. This report surfaces the gaps
for a human to read; it never raises and never repairs the data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from chord_catalog.models import as_record

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from chord_catalog.models import CanonicalChord

AsymmetryKind = Literal["self_reference", "missing_target", "not_reciprocated"]


@dataclass(frozen=True)
class EnharmonicPair:
    """A mutual equivalence, with ``a < b``."""

    a: str
    b: str


@dataclass(frozen=True)
class EnharmonicAsymmetry:
    """A declared equivalence that is not a clean mutual pair.

    Parameters
    ----------
    source : str
        The chord declaring the equivalent.
    target : str
        The declared equivalent.
    kind : AsymmetryKind
        ``self_reference`` and ``missing_target`` are data errors,
        ``not_reciprocated`` is a one-directional link.
    reason : str
        Human-readable explanation.
    """

    source: str
    target: str
    kind: AsymmetryKind
    reason: str


@dataclass(frozen=True)
class EnharmonicReport:
    """Result of :func:`build_enharmonic_report`."""

    pairs: tuple[EnharmonicPair, ...]
    asymmetries: tuple[EnharmonicAsymmetry, ...]
    total_records: int
    records_with_enharmonics: int

    @property
    def errors(self) -> tuple[EnharmonicAsymmetry, ...]:
        """Self-references and references to ids absent from the record set."""
        return tuple(a for a in self.asymmetries if a.kind != "not_reciprocated")

    def to_dict(self) -> dict[str, Any]:
        return {
            "pairs": [{"a": p.a, "b": p.b} for p in self.pairs],
            "asymmetries": [
                {"from": a.source, "to": a.target, "kind": a.kind, "reason": a.reason} for a in self.asymmetries
            ],
            "total_records": self.total_records,
            "records_with_enharmonics": self.records_with_enharmonics,
        }


def build_enharmonic_report(chords: Iterable[CanonicalChord | Mapping[str, Any]]) -> EnharmonicReport:
    """Classify every declared enharmonic equivalence.

    Parameters
    ----------
    chords : Iterable[CanonicalChord | Mapping[str, Any]]
        Catalog records.

    Returns
    -------
    EnharmonicReport
        Pairs sorted by ``(a, b)``, asymmetries sorted by ``(source, target)``.
        A mutual pair is recorded once however many times it is declared.

    Examples
    --------
    >>> report = build_enharmonic_report([
    ...     {"id": "chord:C#:maj", "enharmonic_equivalents": ["chord:Db:maj"]},
    ...     {"id": "chord:Db:maj", "enharmonic_equivalents": ["chord:C#:maj"]},
    ... ])
    >>> report.pairs
    (EnharmonicPair(a='chord:C#:maj', b='chord:Db:maj'),)
    """
    records = [as_record(chord) for chord in chords]
    declared = {r["id"]: list(r.get("enharmonic_equivalents") or ()) for r in records}

    seen: set[tuple[str, str]] = set()
    pairs: list[EnharmonicPair] = []
    asymmetries: list[EnharmonicAsymmetry] = []

    for record in records:
        chord_id = record["id"]
        for equivalent in record.get("enharmonic_equivalents") or ():
            if equivalent == chord_id:
                asymmetries.append(
                    EnharmonicAsymmetry(
                        source=chord_id,
                        target=equivalent,
                        kind="self_reference",
                        reason=f'"{chord_id}" declares itself as an enharmonic equivalent',
                    )
                )
                continue

            if equivalent not in declared:
                asymmetries.append(
                    EnharmonicAsymmetry(
                        source=chord_id,
                        target=equivalent,
                        kind="missing_target",
                        reason=f'"{equivalent}" is declared as an equivalent of "{chord_id}" '
                        "but does not exist in the record set",
                    )
                )
                continue

            if chord_id not in declared[equivalent]:
                asymmetries.append(
                    EnharmonicAsymmetry(
                        source=chord_id,
                        target=equivalent,
                        kind="not_reciprocated",
                        reason=f'"{chord_id}" declares "{equivalent}" as an equivalent, '
                        f'but "{equivalent}" does not reciprocate',
                    )
                )
                continue

            a, b = sorted((chord_id, equivalent))
            if (a, b) not in seen:
                seen.add((a, b))
                pairs.append(EnharmonicPair(a=a, b=b))

    pairs.sort(key=lambda p: (p.a, p.b))
    asymmetries.sort(key=lambda x: (x.source, x.target))

    return EnharmonicReport(
        pairs=tuple(pairs),
        asymmetries=tuple(asymmetries),
        total_records=len(records),
        records_with_enharmonics=sum(1 for r in records if r.get("enharmonic_equivalents")),
    )


def format_enharmonic_report(report: EnharmonicReport) -> str:
    """Render an enharmonic report as Markdown; deterministic for identical input."""
    lines = [
        "# Enharmonic Equivalence Report",
        "",
        f"Examined {report.total_records} chord records; "
        f"{report.records_with_enharmonics} declare at least one enharmonic equivalent.",
        "",
        "## Symmetric Pairs",
        "",
    ]
    if report.pairs:
        lines.extend(["| A | B |", "|---|---|"])
        lines.extend(f"| {p.a} | {p.b} |" for p in report.pairs)
    else:
        lines.append("_No symmetric pairs found._")
    lines.extend(["", "## Asymmetries", ""])
    if report.asymmetries:
        lines.extend(["| From | To | Kind | Reason |", "|------|----|------|--------|"])
        lines.extend(f"| {a.source} | {a.target} | {a.kind} | {a.reason} |" for a in report.asymmetries)
    else:
        lines.append("_No asymmetries detected._")
    lines.append("")
    return "\n".join(lines)
