from fastapi import APIRouter

from odds_gateway.schemas import PresetResponse, SportAliasResponse
from odds_gateway.services.market_presets import MARKET_PRESETS
from odds_gateway.services.sport_alias import SPORT_ALIASES

router = APIRouter()


@router.get("/sports", response_model=list[SportAliasResponse])
async def list_sport_aliases():
    return [SportAliasResponse(alias=alias, sport_key=key) for alias, key in SPORT_ALIASES.items()]


@router.get("/presets", response_model=list[PresetResponse])
async def list_presets():
    return [
        PresetResponse(name=name, markets=list(preset.markets), sport_prefix=preset.sport_prefix)
        for name, preset in MARKET_PRESETS.items()
    ]
