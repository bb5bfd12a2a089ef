from dataclasses import dataclass


@dataclass(frozen=True)
class GrowthPoint:
    """One point of the SIP growth chart, taken at the end of a whole year."""
    year: int
    invested: float
    maturity_value: int


@dataclass(frozen=True)
class SipResult:
    total_invested: float
    maturity_value: float
    total_gains: float
