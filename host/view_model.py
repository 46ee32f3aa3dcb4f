from dataclasses import dataclass


@dataclass(frozen=True)
class CardView:
    suit: str
    rank: int
    face_up: bool


@dataclass(frozen=True)
class ColumnView:
    cards: tuple[CardView, ...]


@dataclass(frozen=True)
class GameViewModel:
    stock_count: int
    score: int
    completed_runs: int
    remaining_deals: int
    won: bool
    columns: tuple[ColumnView, ...]


@dataclass(frozen=True)
class AnimationEvent:
    type: str
    payload: dict
