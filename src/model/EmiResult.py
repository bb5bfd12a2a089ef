from dataclasses import dataclass

@dataclass(frozen=True)
class EmiResult:
    emi: int = 0
    total_interest: int = 0
    total_amount: int = 0
