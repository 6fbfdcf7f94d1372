"""Canonical chord id derivation and guards.

A canonical id has the form ``chord:<root>:<quality>``, e.g. ``chord:C#:min7``.
"""

from __future__ import annotations

import re

from chord_catalog.config import POSITIONS, QUALITY_ORDER, ROOT_ORDER
from chord_catalog.errors import InvalidCanonicalIdError

CHORD_ID_RE = re.compile(r"^chord:([A-G](?:#|b)?):([a-z0-9]+)$")


def is_chord_quality(value: str) -> bool:
    """Check whether ``value`` is one of the canonical qualities."""
    return value in QUALITY_ORDER


def is_voicing_position(value: str) -> bool:
    """Check whether ``value`` is a valid voicing position."""
    return value in POSITIONS


def is_canonical_chord_id(
    value: str,
    roots: tuple[str, ...] = ROOT_ORDER,
    qualities: tuple[str, ...] = QUALITY_ORDER,
) -> bool:
    """Check a chord id against the canonical grammar.

    Parameters
    ----------
    value : str
        Candidate id.
    roots : tuple[str, ...]
        Accepted root alphabet.
    qualities : tuple[str, ...]
        Accepted qualities.

    Returns
    -------
    bool
        True if the id is well formed and uses an accepted root and quality.

    Examples
    --------
    >>> is_canonical_chord_id("chord:Db:maj7")
    True
    >>> is_canonical_chord_id("chord:E#:maj")
    False
    >>> is_canonical_chord_id("C:maj")
    False
    """
    match = CHORD_ID_RE.match(value)
    if match is None:
        return False
    root, quality = match.groups()
    return root in roots and quality in qualities


def assert_canonical_chord_id(
    value: str,
    roots: tuple[str, ...] = ROOT_ORDER,
    qualities: tuple[str, ...] = QUALITY_ORDER,
) -> None:
    """Raise :class:`InvalidCanonicalIdError` unless ``value`` is canonical."""
    if not is_canonical_chord_id(value, roots, qualities):
        raise InvalidCanonicalIdError(value)


def to_chord_id(
    root: str,
    quality: str,
    roots: tuple[str, ...] = ROOT_ORDER,
    qualities: tuple[str, ...] = QUALITY_ORDER,
) -> str:
    """Build the canonical id for a root and canonical quality.

    Parameters
    ----------
    root : str
        Root note (e.g., "C#").
    quality : str
        Canonical quality (e.g., "min7").
    roots : tuple[str, ...]
        Accepted root alphabet.
    qualities : tuple[str, ...]
        Accepted qualities.

    Returns
    -------
    str
        The canonical id.

    Raises
    ------
    InvalidCanonicalIdError
        If the root or quality is outside the accepted sets. Roots are never
        coerced, a bad root means the source parser is defective.

    Examples
    --------
    >>> to_chord_id("C", "maj")
    'chord:C:maj'
    >>> to_chord_id("Bb", "min7")
    'chord:Bb:min7'
    """
    chord_id = f"chord:{root}:{quality}"
    assert_canonical_chord_id(chord_id, roots, qualities)
    return chord_id


def parse_chord_id(value: str) -> tuple[str, str]:
    """Split a canonical id into ``(root, quality)``.

    Examples
    --------
    >>> parse_chord_id("chord:F#:dim7")
    ('F#', 'dim7')
    """
    match = CHORD_ID_RE.match(value)
    if match is None:
        raise InvalidCanonicalIdError(value)
    root, quality = match.groups()
    return root, quality
