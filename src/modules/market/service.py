import random
from datetime import datetime, timezone

from src.modules.market.models import MAX_FLUCTUATION_PERCENT, STOCKS, Stock
from src.modules.market.schemas import MarketResponse, StockQuote


class MarketService:
    """Simulated quotes: each base price moves by a random +/-3 %."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def _quote(self, stock: Stock) -> StockQuote:
        change = round(self._rng.uniform(-MAX_FLUCTUATION_PERCENT, MAX_FLUCTUATION_PERCENT), 2)
        price = round(stock.base_price * (1 + change / 100), 2)
        return StockQuote(symbol=stock.symbol, price=price, change=change)

    def get_quotes(self) -> MarketResponse:
        return MarketResponse(
            data=[self._quote(stock) for stock in STOCKS],
            timestamp=datetime.now(timezone.utc),
        )


market_service = MarketService()
