from pydantic import BaseModel, Field


class Outcome(BaseModel):
    name: str | None = None
    price: int | float | None = None
    point: int | float | None = None  # spread/total line, null for moneyline


class Market(BaseModel):
    key: str | None = None  # h2h, spreads, totals, h2h_h1, ...
    outcomes: list[Outcome] = Field(default_factory=list)


class Bookmaker(BaseModel):
    key: str | None = None
    title: str | None = None
    markets: list[Market] = Field(default_factory=list)


class Event(BaseModel):
    id: str | None = None
    sport_key: str | None = None
    commence_time: str | int | None = None  # iso string or unix seconds, as requested
    home: str | None = None
    away: str | None = None
    bookmakers: list[Bookmaker] = Field(default_factory=list)
