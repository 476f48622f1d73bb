from fastapi import APIRouter

from src.modules.market.schemas import MarketResponse
from src.modules.market.service import market_service

router = APIRouter()


@router.get("", response_model=MarketResponse)
async def get_market() -> MarketResponse:
    return market_service.get_quotes()
