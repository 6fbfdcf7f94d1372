"""Data models for raw and canonical chord records.

Raw records are what a source parser extracts for one chord page. Canonical
records are the merged, published unit. Both serialize to the JSON shape
governed by ``chords.schema.json`` through ``to_dict``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from collections.abc import Mapping

Position = Literal["open", "barre", "upper", "unknown"]

ConfidenceLevel = Literal["low", "medium", "high"]

# Per-string fret; None marks a muted string
Fret = int | None


@dataclass(frozen=True)
class SourceRef:
    """A citation of the page a chord or voicing was extracted from.

    Parameters
    ----------
    source : str
        Source registry id (e.g., "guitar-chord-org").
    url : str
        Page URL.
    retrieved_at : str | None
        ISO 8601 timestamp of retrieval, if known.
    note : str | None
        Free-text remark.
    """

    source: str
    url: str
    retrieved_at: str | None = None
    note: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON object, omitting unset optional keys."""
        out: dict[str, Any] = {"source": self.source, "url": self.url}
        if self.retrieved_at is not None:
            out["retrieved_at"] = self.retrieved_at
        if self.note is not None:
            out["note"] = self.note
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SourceRef:
        """Build from a JSON object. Missing ``source``/``url`` become empty strings."""
        return cls(
            source=data.get("source", ""),
            url=data.get("url", ""),
            retrieved_at=data.get("retrieved_at"),
            note=data.get("note"),
        )


@dataclass(frozen=True)
class ParserConfidence:
    """How completely a source parser extracted one chord page.

    Parameters
    ----------
    source : str
        Source registry id of the parser.
    level : ConfidenceLevel
        ``high`` when every field and voicing was found, ``low`` when core
        fields are missing.
    checks : tuple[str, ...]
        Names of the checks that passed (e.g., "has_formula").
    """

    source: str
    level: ConfidenceLevel
    checks: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON object."""
        return {"source": self.source, "level": self.level, "checks": list(self.checks)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ParserConfidence:
        """Build from a JSON object; ``checks`` defaults to empty."""
        return cls(source=data["source"], level=data["level"], checks=tuple(data.get("checks") or ()))


def _refs_from(data: Mapping[str, Any]) -> tuple[SourceRef, ...]:
    return tuple(SourceRef.from_dict(ref) for ref in data.get("source_refs") or ())


def _frets_from(values: Any) -> tuple[Fret, ...] | None:
    if values is None:
        return None
    return tuple(values)


def _tags_from(values: Any) -> tuple[str, ...] | None:
    if values is None:
        return None
    return tuple(values)


@dataclass(frozen=True)
class RawVoicing:
    """One fretting pattern as scraped, before position derivation.

    Parameters
    ----------
    frets : tuple[Fret, ...]
        Per-string fret numbers from low to high string, None when muted.
    base_fret : int
        The fret the diagram starts at.
    fingers : tuple[Fret, ...] | None
        Per-string finger assignment, if the source provides one.
    id : str | None
        Source-local voicing id; replaced during merge.
    source_refs : tuple[SourceRef, ...]
        Citations attached by the parser.
    tags : tuple[str, ...] | None
        Free-form labels from the source (e.g., "beginner").
    difficulty : str | None
        Difficulty label from the source.
    """

    frets: tuple[Fret, ...]
    base_fret: int = 1
    fingers: tuple[Fret, ...] | None = None
    id: str | None = None
    source_refs: tuple[SourceRef, ...] = ()
    tags: tuple[str, ...] | None = None
    difficulty: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RawVoicing:
        """Build from a parser's JSON voicing; ``frets`` is required."""
        return cls(
            frets=tuple(data["frets"]),
            base_fret=data.get("base_fret", 1),
            fingers=_frets_from(data.get("fingers")),
            id=data.get("id"),
            source_refs=_refs_from(data),
            tags=_tags_from(data.get("tags")),
            difficulty=data.get("difficulty"),
        )


@dataclass(frozen=True)
class RawRecord:
    """One source's un-merged extraction for a single chord.

    Parameters
    ----------
    source : str
        Source registry id.
    url : str
        Page the record was extracted from.
    root : str
        Root note as printed by the source.
    quality_raw : str
        Free-text quality token (e.g., "major", "m7", "°").
    aliases : tuple[str, ...]
        Alternative names listed by the source.
    formula : tuple[str, ...]
        Interval formula, possibly empty.
    pitch_classes : tuple[str, ...]
        Note names, possibly empty.
    voicings : tuple[RawVoicing, ...]
        Scraped fingerings.
    symbol : str | None
        Lead-sheet symbol shown on the page (e.g., "C#m7").
    parser_confidence : ParserConfidence | None
        The parser's self-assessment for this page, if it reports one.

    Examples
    --------
    >>> record = RawRecord(source="unit", url="https://example.com", root="C", quality_raw="major")
    >>> record.quality_raw
    'major'
    """

    source: str
    url: str
    root: str
    quality_raw: str
    aliases: tuple[str, ...] = ()
    formula: tuple[str, ...] = ()
    pitch_classes: tuple[str, ...] = ()
    voicings: tuple[RawVoicing, ...] = ()
    symbol: str | None = None
    parser_confidence: ParserConfidence | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RawRecord:
        """Build from a parser's JSON record.

        Raises
        ------
        KeyError
            If ``source``, ``url``, ``root`` or ``quality_raw`` is missing.
        """
        confidence = data.get("parser_confidence")
        return cls(
            source=data["source"],
            url=data["url"],
            root=data["root"],
            quality_raw=data["quality_raw"],
            aliases=tuple(data.get("aliases") or ()),
            formula=tuple(data.get("formula") or ()),
            pitch_classes=tuple(data.get("pitch_classes") or ()),
            voicings=tuple(RawVoicing.from_dict(v) for v in data.get("voicings") or ()),
            symbol=data.get("symbol"),
            parser_confidence=ParserConfidence.from_dict(confidence) if confidence is not None else None,
        )


@dataclass(frozen=True)
class Voicing:
    """A merged voicing with its derived position.

    Parameters
    ----------
    id : str
        ``<chord id>:v<n>:<source>``.
    frets : tuple[Fret, ...]
        Per-string fret numbers, None when muted.
    base_fret : int
        The fret the diagram starts at.
    position : Position
        Derived fretboard location.
    source_refs : tuple[SourceRef, ...]
        Citations for this voicing.
    fingers : tuple[Fret, ...] | None
        Per-string finger assignment.
    tags : tuple[str, ...] | None
        Labels carried over from the raw voicing.
    difficulty : str | None
        Difficulty carried over from the raw voicing.
    """

    id: str
    frets: tuple[Fret, ...]
    base_fret: int
    position: Position
    source_refs: tuple[SourceRef, ...]
    fingers: tuple[Fret, ...] | None = None
    tags: tuple[str, ...] | None = None
    difficulty: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON voicing shape, omitting unset optional keys."""
        out: dict[str, Any] = {"id": self.id, "frets": list(self.frets)}
        if self.fingers is not None:
            out["fingers"] = list(self.fingers)
        out["base_fret"] = self.base_fret
        if self.tags is not None:
            out["tags"] = list(self.tags)
        if self.difficulty is not None:
            out["difficulty"] = self.difficulty
        out["position"] = self.position
        out["source_refs"] = [ref.to_dict() for ref in self.source_refs]
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Voicing:
        """Build from a catalog JSON voicing."""
        return cls(
            id=data["id"],
            frets=tuple(data["frets"]),
            base_fret=data["base_fret"],
            position=data["position"],
            source_refs=_refs_from(data),
            fingers=_frets_from(data.get("fingers")),
            tags=_tags_from(data.get("tags")),
            difficulty=data.get("difficulty"),
        )


@dataclass(frozen=True)
class CanonicalChord:
    """The deduplicated, merged representation of one chord.

    Parameters
    ----------
    id : str
        ``chord:<root>:<quality>``.
    root : str
        Root note from the 17-symbol alphabet.
    quality : str
        Canonical quality.
    aliases : tuple[str, ...]
        Unique names, in order of first appearance.
    enharmonic_equivalents : tuple[str, ...]
        Ids of the same chord spelled from the enharmonic root.
    formula : tuple[str, ...]
        Interval formula.
    pitch_classes : tuple[str, ...]
        Note names.
    tuning : tuple[str, ...]
        Open-string tuning the voicings assume.
    voicings : tuple[Voicing, ...]
        Merged voicings.
    source_refs : tuple[SourceRef, ...]
        One citation per contributing source.
    notes : Mapping[str, str] | None
        Descriptive text, currently only ``summary``.
    parser_confidence : tuple[ParserConfidence, ...] | None
        One entry per contributing source, sorted by source. Only set when
        the merge was asked to keep parser confidence.
    """

    id: str
    root: str
    quality: str
    aliases: tuple[str, ...]
    enharmonic_equivalents: tuple[str, ...]
    formula: tuple[str, ...]
    pitch_classes: tuple[str, ...]
    tuning: tuple[str, ...]
    voicings: tuple[Voicing, ...]
    source_refs: tuple[SourceRef, ...]
    notes: Mapping[str, str] | None = None
    parser_confidence: tuple[ParserConfidence, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON record shape.

        Returns
        -------
        dict[str, Any]
            Plain dict with list values, suitable for ``json.dumps``.
        """
        out: dict[str, Any] = {
            "id": self.id,
            "root": self.root,
            "quality": self.quality,
            "aliases": list(self.aliases),
            "enharmonic_equivalents": list(self.enharmonic_equivalents),
            "formula": list(self.formula),
            "pitch_classes": list(self.pitch_classes),
            "tuning": list(self.tuning),
            "voicings": [v.to_dict() for v in self.voicings],
        }
        if self.notes is not None:
            out["notes"] = dict(self.notes)
        if self.parser_confidence is not None:
            out["parser_confidence"] = [c.to_dict() for c in self.parser_confidence]
        out["source_refs"] = [ref.to_dict() for ref in self.source_refs]
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CanonicalChord:
        """Build from a catalog JSON record, as written by :meth:`to_dict`."""
        notes = data.get("notes")
        confidence = data.get("parser_confidence")
        return cls(
            id=data["id"],
            root=data["root"],
            quality=data["quality"],
            aliases=tuple(data.get("aliases") or ()),
            enharmonic_equivalents=tuple(data.get("enharmonic_equivalents") or ()),
            formula=tuple(data.get("formula") or ()),
            pitch_classes=tuple(data.get("pitch_classes") or ()),
            tuning=tuple(data.get("tuning") or ()),
            voicings=tuple(Voicing.from_dict(v) for v in data.get("voicings") or ()),
            source_refs=_refs_from(data),
            notes=dict(notes) if notes is not None else None,
            parser_confidence=(
                tuple(ParserConfidence.from_dict(c) for c in confidence) if confidence is not None else None
            ),
        )


def as_record(chord: CanonicalChord | Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the JSON mapping form of a chord.

    Validators accept either model instances or already-serialized records.
    """
    if isinstance(chord, CanonicalChord):
        return chord.to_dict()
    return chord
