"""Merge raw per-source chord records into canonical chords.

Raw records are grouped by canonical id. The first record seen for an id
seeds the chord; later records for the same id only append aliases, voicings
and source citations. The result is sorted into a total order and checked for
alias collisions before it is returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import TYPE_CHECKING

from chord_catalog.config import NormalizationTables
from chord_catalog.converter import to_symbol
from chord_catalog.errors import AliasCollision, AliasCollisionError
from chord_catalog.identity import to_chord_id
from chord_catalog.models import CanonicalChord, SourceRef, Voicing
from chord_catalog.normalize import QualityNormalizer
from chord_catalog.pitch_class import derive_pitch_classes, unique_strings
from chord_catalog.position import derive_position
from chord_catalog.sorting import chord_sort_key

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from chord_catalog.models import ParserConfidence, RawRecord

logger = logging.getLogger(__name__)


@dataclass
class _ChordAccumulator:
    """Mutable state for one canonical chord during a single merge pass."""

    id: str
    root: str
    quality: str
    aliases: list[str]
    enharmonic_equivalents: tuple[str, ...]
    formula: tuple[str, ...]
    pitch_classes: tuple[str, ...]
    tuning: tuple[str, ...]
    voicings: list[Voicing]
    source_refs: list[SourceRef]
    summary: str
    parser_confidence: list[ParserConfidence] | None = None

    def add_source_ref(self, ref: SourceRef) -> None:
        """Cite ``ref`` unless its source is already cited; keeps refs sorted by (source, url)."""
        if any(existing.source == ref.source for existing in self.source_refs):
            return
        self.source_refs.append(ref)
        self.source_refs.sort(key=lambda r: (r.source, r.url))

    def add_parser_confidence(self, confidence: ParserConfidence | None) -> None:
        """Record one confidence entry per source, sorted by source."""
        if confidence is None:
            return
        entries = self.parser_confidence if self.parser_confidence is not None else []
        if not any(entry.source == confidence.source for entry in entries):
            entries.append(confidence)
        entries.sort(key=lambda c: c.source)
        self.parser_confidence = entries

    def freeze(self) -> CanonicalChord:
        return CanonicalChord(
            id=self.id,
            root=self.root,
            quality=self.quality,
            aliases=tuple(self.aliases),
            enharmonic_equivalents=self.enharmonic_equivalents,
            formula=self.formula,
            pitch_classes=self.pitch_classes,
            tuning=self.tuning,
            voicings=tuple(self.voicings),
            source_refs=tuple(self.source_refs),
            notes={"summary": self.summary},
            parser_confidence=tuple(self.parser_confidence) if self.parser_confidence is not None else None,
        )


def _build_voicings(chord_id: str, record: RawRecord, ref: SourceRef, start: int) -> list[Voicing]:
    """Number a record's voicings from ``start + 1`` and derive their positions."""
    return [
        Voicing(
            id=f"{chord_id}:v{start + offset}:{record.source}",
            frets=tuple(raw.frets),
            base_fret=raw.base_fret,
            position=derive_position(raw.frets),
            source_refs=raw.source_refs or (ref,),
            fingers=raw.fingers,
            tags=raw.tags,
            difficulty=raw.difficulty,
        )
        for offset, raw in enumerate(record.voicings, start=1)
    ]


class MergeEngine:
    """Reconcile raw records from several sources into canonical chords.

    Parameters
    ----------
    tables : NormalizationTables | None
        Lookup tables; the shipped defaults when omitted.
    include_parser_confidence : bool
        Keep each source's ``parser_confidence`` on the merged chord, one
        entry per source. Off by default.

    Examples
    --------
    >>> from chord_catalog.models import RawRecord
    >>> engine = MergeEngine()
    >>> chords = engine.merge([
    ...     RawRecord(source="a", url="https://a.test/c", root="C", quality_raw="major", aliases=("C",)),
    ...     RawRecord(source="b", url="https://b.test/c", root="C", quality_raw="M", aliases=("C", "CM")),
    ... ])
    >>> [(c.id, c.aliases) for c in chords]
    [('chord:C:maj', ('C', 'CM'))]
    """

    def __init__(self, tables: NormalizationTables | None = None, include_parser_confidence: bool = False) -> None:
        self.tables = tables or NormalizationTables.default()
        self.include_parser_confidence = include_parser_confidence
        self.normalizer = QualityNormalizer(self.tables)

    def chord_id(self, root: str, quality: str) -> str:
        return to_chord_id(root, quality, self.tables.roots, self.tables.qualities)

    def _default_alias(self, root: str, quality: str) -> str:
        try:
            return to_symbol(root, quality)
        except ValueError:
            return f"{root}{quality}"

    def _enharmonic_link(self, root: str, quality: str) -> tuple[str, ...]:
        equivalent_root = self.tables.enharmonic_roots.get(root)
        if equivalent_root is None:
            return ()
        return (self.chord_id(equivalent_root, quality),)

    def merge(self, raw_records: Iterable[RawRecord]) -> list[CanonicalChord]:
        """Merge raw records into sorted canonical chords.

        Records are processed in input order. The first record for an id
        provides the summary text and tuning; subsequent records append to
        aliases, voicings and source refs but never replace them.

        Parameters
        ----------
        raw_records : Iterable[RawRecord]
            Records in source registry order.

        Returns
        -------
        list[CanonicalChord]
            One chord per canonical id, sorted by root, quality and id.

        Raises
        ------
        UnsupportedQualityError
            If a record's quality token is not in the alias table.
        InvalidCanonicalIdError
            If a record's root is outside the accepted alphabet.
        AliasCollisionError
            If distinct, non-enharmonic chords share an alias.
        """
        merged: dict[str, _ChordAccumulator] = {}
        record_count = 0

        for record in raw_records:
            record_count += 1
            quality = self.normalizer.normalize(record.quality_raw)
            chord_id = self.chord_id(record.root, quality)

            formula = unique_strings(record.formula) or list(self.tables.default_formulas.get(quality, ()))
            pitch_classes = unique_strings(record.pitch_classes) or derive_pitch_classes(record.root, formula)
            aliases = unique_strings(record.aliases) or [self._default_alias(record.root, quality)]
            ref = SourceRef(source=record.source, url=record.url)

            existing = merged.get(chord_id)
            if existing is None:
                logger.debug("seeding %s from %s", chord_id, record.source)
                merged[chord_id] = _ChordAccumulator(
                    id=chord_id,
                    root=record.root,
                    quality=quality,
                    aliases=aliases,
                    enharmonic_equivalents=self._enharmonic_link(record.root, quality),
                    formula=tuple(formula),
                    pitch_classes=tuple(pitch_classes),
                    tuning=self.tables.tuning,
                    voicings=_build_voicings(chord_id, record, ref, start=0),
                    source_refs=[ref],
                    summary=f"{record.root} {quality} chord with formula {'-'.join(formula)}.",
                )
                if self.include_parser_confidence:
                    merged[chord_id].add_parser_confidence(record.parser_confidence)
                continue

            logger.debug("merging %s from %s", chord_id, record.source)
            existing.aliases = unique_strings([*existing.aliases, *aliases])
            existing.voicings.extend(_build_voicings(chord_id, record, ref, start=len(existing.voicings)))
            existing.voicings.sort(key=lambda v: v.id)
            existing.add_source_ref(ref)
            if self.include_parser_confidence:
                existing.add_parser_confidence(record.parser_confidence)

        chords = sorted(
            (acc.freeze() for acc in merged.values()),
            key=lambda c: chord_sort_key(c, self.tables.roots, self.tables.qualities),
        )
        detect_alias_collisions(chords)
        logger.info("merged %d raw records into %d canonical chords", record_count, len(chords))
        return chords


def merge_records(
    raw_records: Iterable[RawRecord],
    tables: NormalizationTables | None = None,
    include_parser_confidence: bool = False,
) -> list[CanonicalChord]:
    """Merge raw records with a one-off :class:`MergeEngine`."""
    return MergeEngine(tables, include_parser_confidence).merge(raw_records)


def _all_mutual(chord_ids: Sequence[str], equivalents: dict[str, set[str]]) -> bool:
    """True when every pair of ids declares the other as an enharmonic equivalent."""
    return all(
        b in equivalents.get(a, set()) and a in equivalents.get(b, set()) for a, b in combinations(chord_ids, 2)
    )


def detect_alias_collisions(chords: Sequence[CanonicalChord]) -> None:
    """Fail when an alias resolves to more than one chord.

    Sharing is allowed only when every chord involved lists every other as an
    enharmonic equivalent, since enharmonic spellings legitimately share
    names. All offending aliases are reported together.

    Parameters
    ----------
    chords : Sequence[CanonicalChord]
        Merged chords.

    Raises
    ------
    AliasCollisionError
        Listing every colliding alias, sorted by alias.
    """
    equivalents = {chord.id: set(chord.enharmonic_equivalents) for chord in chords}

    alias_to_ids: dict[str, list[str]] = {}
    for chord in chords:
        for alias in chord.aliases:
            ids = alias_to_ids.setdefault(alias, [])
            if chord.id not in ids:
                ids.append(chord.id)

    collisions = [
        AliasCollision(alias=alias, chord_ids=tuple(ids))
        for alias, ids in sorted(alias_to_ids.items())
        if len(ids) > 1 and not _all_mutual(ids, equivalents)
    ]
    if collisions:
        raise AliasCollisionError(collisions)
