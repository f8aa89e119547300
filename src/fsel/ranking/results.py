"""Result dataclasses for attribute ranking.

These classes store per-attribute importance estimates, their optional
bootstrap confidence bounds, and the advisory events raised while producing
them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

import numpy as np
import polars as pl


@dataclass
class ImportanceRecord:
    """Importance of a single attribute.

    Bounds, when present, normally satisfy lower <= importance <= upper, but
    resampling noise can put the point estimate outside its own interval.

    Attributes:
        attribute: Attribute name (or 1-based index for unnamed sparse input).
        importance: Point estimate; may be non-finite for constant attributes.
        lower: Lower confidence bound, or None when intervals are disabled.
        upper: Upper confidence bound, or None when intervals are disabled.
    """

    attribute: Any
    importance: float
    lower: float | None = None
    upper: float | None = None

    @property
    def is_finite(self) -> bool:
        """Whether the point estimate is a finite number."""
        return math.isfinite(self.importance)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "attribute": self.attribute,
            "importance": self.importance,
            "lower": self.lower,
            "upper": self.upper,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ImportanceRecord:
        """Create from dictionary."""
        return cls(**data)


@dataclass
class Advisory:
    """Structured notice about a non-fatal condition met during ranking.

    Attributes:
        code: Stable identifier, e.g. "missing_response_removed".
        message: Human-readable description.
        context: Details such as counts or attribute names.
    """

    code: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"code": self.code, "message": self.message, "context": self.context}

    @classmethod
    def from_dict(cls, data: dict) -> Advisory:
        """Create from dictionary."""
        return cls(
            code=data["code"],
            message=data["message"],
            context=dict(data.get("context", {})),
        )


@dataclass
class RankingResult:
    """Importance of every attribute, in input column order.

    Attributes:
        records: One ImportanceRecord per attribute.
        importance_type: "infogain", "gainratio" or "symuncert".
        confidence: Confidence level of the bounds, None if not computed.
        n_boot: Number of bootstrap draws, 0 if not computed.
        advisories: Non-fatal notices raised while ranking.
    """

    records: list[ImportanceRecord]
    importance_type: str
    confidence: float | None = None
    n_boot: int = 0
    advisories: list[Advisory] = field(default_factory=list)

    @property
    def has_intervals(self) -> bool:
        return self.confidence is not None

    @property
    def attributes(self) -> list[Any]:
        return [r.attribute for r in self.records]

    @property
    def importances(self) -> list[float]:
        return [r.importance for r in self.records]

    def __len__(self) -> int:
        return len(self.records)

    def __getitem__(self, attribute: Any) -> ImportanceRecord:
        for record in self.records:
            if record.attribute == attribute:
                return record
        raise KeyError(attribute)

    def advisory_codes(self) -> list[str]:
        """Codes of all advisories, in the order they were raised."""
        return [a.code for a in self.advisories]

    def ranked(self) -> list[ImportanceRecord]:
        """Records sorted by importance, highest first, non-finite last."""
        return sorted(
            self.records,
            key=lambda r: (not r.is_finite, -r.importance if r.is_finite else 0.0),
        )

    def to_frame(self, sort: bool = False) -> pl.DataFrame:
        """Tabulate as ``attributes, importance[, lower, upper]``.

        Args:
            sort: If True, order rows by descending importance.
        """
        records = self.ranked() if sort else self.records
        data: dict[str, list[Any]] = {
            "attributes": [r.attribute for r in records],
            "importance": [r.importance for r in records],
        }
        if self.has_intervals:
            data["lower"] = [r.lower for r in records]
            data["upper"] = [r.upper for r in records]
        return pl.DataFrame(data)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "importance_type": self.importance_type,
            "confidence": self.confidence,
            "n_boot": self.n_boot,
            "records": [r.to_dict() for r in self.records],
            "advisories": [a.to_dict() for a in self.advisories],
        }

    @classmethod
    def from_dict(cls, data: dict) -> RankingResult:
        """Create from dictionary."""
        return cls(
            records=[ImportanceRecord.from_dict(r) for r in data.get("records", [])],
            importance_type=data["importance_type"],
            confidence=data.get("confidence"),
            n_boot=data.get("n_boot", 0),
            advisories=[Advisory.from_dict(a) for a in data.get("advisories", [])],
        )


def assemble_result(
    names: Sequence[Any],
    scores: np.ndarray,
    *,
    importance_type: str,
    bounds: Mapping[Any, tuple[float, float]] | None = None,
    confidence: float | None = None,
    n_boot: int = 0,
    advisories: Sequence[Advisory] = (),
) -> RankingResult:
    """Merge names, point estimates and optional bounds into a RankingResult.

    Args:
        names: Attribute identifiers in input order.
        scores: Point estimates aligned with ``names``.
        importance_type: Measure the scores were computed with.
        bounds: Optional mapping of attribute to a (lower, upper, ...) tuple.
        confidence: Confidence level of ``bounds``.
        n_boot: Number of bootstrap draws behind ``bounds``.
        advisories: Notices to attach.
    """
    records = []
    for name, score in zip(names, scores):
        record = ImportanceRecord(attribute=_plain(name), importance=float(score))
        if bounds is not None:
            interval = bounds[name]
            record.lower = float(interval[0])
            record.upper = float(interval[1])
        records.append(record)

    return RankingResult(
        records=records,
        importance_type=importance_type,
        confidence=confidence if bounds is not None else None,
        n_boot=n_boot if bounds is not None else 0,
        advisories=list(advisories),
    )


def _plain(name: Any) -> Any:
    """Unwrap numpy scalars so names serialize cleanly."""
    return name.item() if isinstance(name, np.generic) else name
