from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from insights.records import coerce_number


@dataclass(frozen=True)
class BinTable:
    """Ordered upper cut points mapped to labels, plus an open-ended top bucket.

    Buckets are half-open ``[lo, hi)``: the first cut with ``value < cut`` wins, so a
    value sitting on a cut point lands in the bucket above it. Anything that is not a
    number is treated as 0.
    """

    cuts: Tuple[Tuple[float, str], ...]
    overflow: str

    def label_for(self, value: object) -> str:
        number = coerce_number(value)
        for upper, label in self.cuts:
            if number < upper:
                return label
        return self.overflow

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(label for _, label in self.cuts) + (self.overflow,)


AGE_BANDS = BinTable(
    cuts=(
        (25, "Under 25"),
        (30, "25-29"),
        (35, "30-34"),
        (40, "35-39"),
        (45, "40-44"),
        (50, "45-49"),
    ),
    overflow="50+",
)

AGE_DECADES = BinTable(
    cuts=(
        (30, "Under 30"),
        (40, "30-39"),
        (50, "40-49"),
        (60, "50-59"),
    ),
    overflow="60+",
)

TENURE_BANDS = BinTable(
    cuts=(
        (7, "0-6 months"),
        (13, "7-12 months"),
        (25, "13-24 months"),
        (49, "25-48 months"),
    ),
    overflow="49+ months",
)

INCOME_BANDS = BinTable(
    cuts=(
        (3000, "Under 3K"),
        (6000, "3K-6K"),
        (10000, "6K-10K"),
        (15000, "10K-15K"),
    ),
    overflow="15K+",
)

CHARGE_BANDS = BinTable(
    cuts=(
        (35, "Under 35"),
        (70, "35-69"),
        (90, "70-89"),
    ),
    overflow="90+",
)


def age_band(value: object) -> str:
    return AGE_BANDS.label_for(value)


def age_decade(value: object) -> str:
    return AGE_DECADES.label_for(value)


def tenure_band(value: object) -> str:
    return TENURE_BANDS.label_for(value)


def income_band(value: object) -> str:
    return INCOME_BANDS.label_for(value)


def charge_band(value: object) -> str:
    return CHARGE_BANDS.label_for(value)
