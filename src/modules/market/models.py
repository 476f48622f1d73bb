from dataclasses import dataclass


@dataclass(frozen=True)
class Stock:
    symbol: str
    base_price: float


STOCKS: tuple[Stock, ...] = (
    Stock("RELIANCE", 2847.50),
    Stock("TCS", 4123.25),
    Stock("HDFC BANK", 1645.75),
    Stock("INFOSYS", 1856.30),
    Stock("ICICI BANK", 1234.50),
    Stock("BHARTI AIRTEL", 1567.80),
)

MAX_FLUCTUATION_PERCENT = 3.0
