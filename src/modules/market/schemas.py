from datetime import datetime

from pydantic import BaseModel


class StockQuote(BaseModel):
    symbol: str
    price: float
    change: float


class MarketResponse(BaseModel):
    ok: bool = True
    data: list[StockQuote]
    timestamp: datetime
