"""Conversion between canonical qualities and lead-sheet chord symbols.

This module maps the catalog's canonical qualities (e.g., "min7") onto the
pychord symbol suffixes printed on chord pages (e.g., "Gm7"), and parses such
symbols back into a root and raw quality token.
"""

from __future__ import annotations

from chord_catalog.errors import UnsupportedQualityError

# Canonical quality to pychord quality suffix
QUALITY_TO_SYMBOL_SUFFIX: dict[str, str] = {
    "maj": "",
    "min": "m",
    "7": "7",
    "maj7": "maj7",
    "min7": "m7",
    "dim": "dim",
    "dim7": "dim7",
    "aug": "aug",
    "sus2": "sus2",
    "sus4": "sus4",
}


def quality_to_symbol_suffix(quality: str) -> str:
    """Convert a canonical quality to its lead-sheet suffix.

    Parameters
    ----------
    quality : str
        Canonical quality (e.g., "min7").

    Returns
    -------
    str
        The pychord suffix (e.g., "m7").

    Raises
    ------
    ValueError
        If the quality is not recognized.

    Examples
    --------
    >>> quality_to_symbol_suffix("min7")
    'm7'
    >>> quality_to_symbol_suffix("maj")
    ''
    """
    if quality in QUALITY_TO_SYMBOL_SUFFIX:
        return QUALITY_TO_SYMBOL_SUFFIX[quality]
    msg = f"Unknown canonical quality: {quality}"
    raise ValueError(msg)


def to_symbol(root: str, quality: str) -> str:
    """Build the lead-sheet symbol for a root and canonical quality.

    Examples
    --------
    >>> to_symbol("C", "maj")
    'C'
    >>> to_symbol("F#", "min7")
    'F#m7'
    """
    return f"{root}{quality_to_symbol_suffix(quality)}"


def split_symbol(symbol: str) -> tuple[str, str]:
    """Parse a lead-sheet symbol into ``(root, quality_raw)``.

    The quality token is returned as pychord reports it, ready for the
    quality normalizer.

    Parameters
    ----------
    symbol : str
        Chord symbol (e.g., "Bbm7", "C").

    Returns
    -------
    tuple[str, str]
        Root and raw quality token.

    Raises
    ------
    UnsupportedQualityError
        If pychord cannot parse the symbol.

    Examples
    --------
    >>> split_symbol("Bbm7")
    ('Bb', 'm7')
    >>> split_symbol("C")
    ('C', '')
    """
    from pychord import Chord as PyChord

    try:
        pc = PyChord(symbol.strip())
    except ValueError as exc:
        raise UnsupportedQualityError(symbol) from exc
    return pc.root, str(pc.quality)
