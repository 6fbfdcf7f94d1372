"""Free-text chord quality normalization."""

from __future__ import annotations

from chord_catalog.config import NormalizationTables
from chord_catalog.errors import UnsupportedQualityError


class QualityNormalizer:
    """Map free-text quality tokens onto the closed set of canonical qualities.

    Parameters
    ----------
    tables : NormalizationTables | None
        Lookup tables; the shipped defaults when omitted.

    Examples
    --------
    >>> normalizer = QualityNormalizer()
    >>> normalizer.normalize("major")
    'maj'
    >>> normalizer.normalize("Δ7")
    'maj7'
    >>> normalizer.normalize("MINOR")
    'min'
    """

    def __init__(self, tables: NormalizationTables | None = None) -> None:
        self.tables = tables or NormalizationTables.default()

    def normalize(self, quality_raw: str) -> str:
        """Normalize a quality token.

        The trimmed token is looked up as-is first, so case-sensitive symbols
        like "M" (major) and "m" (minor) keep their meaning, then lower-cased.

        Parameters
        ----------
        quality_raw : str
            Token as scraped (e.g., "minor", "°", "M7").

        Returns
        -------
        str
            Canonical quality.

        Raises
        ------
        UnsupportedQualityError
            If neither lookup matches.
        """
        aliases = self.tables.quality_aliases
        token = quality_raw.strip()
        if token in aliases:
            return aliases[token]
        lowered = token.lower()
        if lowered in aliases:
            return aliases[lowered]
        raise UnsupportedQualityError(quality_raw)


def normalize_quality(quality_raw: str) -> str:
    """Normalize a quality token with the default tables.

    Examples
    --------
    >>> normalize_quality("m7")
    'min7'
    """
    return QualityNormalizer().normalize(quality_raw)
