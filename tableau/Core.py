import random
from enum import Enum

COLUMN_COUNT = 10
RUN_LENGTH = 13
DECK_COPIES = 8
WINNING_RUNS = 8
INITIAL_SCORE = 500
INITIAL_DEALS = 5
RUN_BONUS = 100

DEAL_COLUMN = -1
REMOVED_COLUMN = -2


def lastOf(lst):
    return lst[len(lst) - 1]


class Suit(Enum):
    SPADES = 0
    HEARTS = 1
    CLUBS = 2
    DIAMONDS = 3

    @property
    def symbol(self):
        return "♠♥♣♦"[self.value]

    @property
    def color(self):
        if self in (Suit.SPADES, Suit.CLUBS):
            return "black"
        return "red"


SUITS_BY_DIFFICULTY = {
    1: (Suit.SPADES,),
    2: (Suit.SPADES, Suit.HEARTS),
    4: (Suit.SPADES, Suit.HEARTS, Suit.CLUBS, Suit.DIAMONDS),
}


def suitsFor(difficulty):
    try:
        return SUITS_BY_DIFFICULTY[difficulty]
    except (KeyError, TypeError):
        raise ValueError(f"unsupported difficulty: {difficulty!r}") from None


class Card:
    RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")

    def __init__(self, suit: Suit, rank: int, faceUp=False):
        if not isinstance(suit, Suit):
            raise ValueError(f"invalid suit: {suit!r}")
        if isinstance(rank, bool) or not isinstance(rank, int) or not 1 <= rank <= RUN_LENGTH:
            raise ValueError(f"rank out of range: {rank!r}")
        self.suit = suit
        self.rank = rank
        self.faceUp = faceUp

    def flip(self):
        self.faceUp = not self.faceUp

    def rankSymbol(self):
        return Card.RANKS[self.rank - 1]

    def suitSymbol(self):
        return self.suit.symbol

    def color(self):
        return self.suit.color

    def gameStr(self):
        if not self.faceUp:
            return "XX"
        return self.rankSymbol() + self.suitSymbol()

    def continuesRun(self, upper):
        """True if `upper` can sit directly on this card inside a run."""
        return self.suit == upper.suit and self.rank == upper.rank + 1

    def __str__(self):
        return self.gameStr()

    def __repr__(self):
        return self.__str__()


class Deck:
    def __init__(self, difficulty, rng: random.Random = None):
        suits = suitsFor(difficulty)
        self.cards = []
        for _ in range(DECK_COPIES):
            for suit in suits:
                for rank in range(1, RUN_LENGTH + 1):
                    self.cards.append(Card(suit, rank))
        (rng or random).shuffle(self.cards)

    def draw(self):
        if len(self.cards) == 0:
            return None
        return self.cards.pop()

    def isEmpty(self):
        return len(self.cards) == 0

    def __len__(self):
        return len(self.cards)


class Move:
    """
    Undo record.
    fromColumn == toColumn == DEAL_COLUMN : a deal, movedCards are the dealt cards in column order.
    toColumn == REMOVED_COLUMN : a completed run taken off fromColumn.
    Otherwise an ordinary move of movedCards (bottom to top).
    """

    def __init__(self, fromColumn, toColumn, movedCards, causedFlip=False,
                 flippedCardWasFaceUpBefore=True, flippedCard=None):
        self.fromColumn = fromColumn
        self.toColumn = toColumn
        self.movedCards = movedCards
        self.causedFlip = causedFlip
        self.flippedCardWasFaceUpBefore = flippedCardWasFaceUpBefore
        self.flippedCard = flippedCard

    def isDeal(self):
        return self.fromColumn == DEAL_COLUMN and self.toColumn == DEAL_COLUMN

    def isRunRemoval(self):
        return self.toColumn == REMOVED_COLUMN

    def __repr__(self):
        return f"Move({self.fromColumn}->{self.toColumn}, {self.movedCards})"


class TableauState:
    def __init__(self, suits=1):
        suitsFor(suits)
        self.suits = suits
        self.columns = [[] for _ in range(COLUMN_COUNT)]
        self.stock = []
        self.undoLog = []
        self.score = INITIAL_SCORE
        self.completedRuns = 0
        self.remainingDeals = INITIAL_DEALS

    @staticmethod
    def deal(difficulty, rng: random.Random = None):
        state = TableauState(difficulty)
        deck = Deck(difficulty, rng)
        for i, column in enumerate(state.columns):
            size = 6 if i < 4 else 5
            for j in range(size):
                card = deck.draw()
                if j == size - 1:
                    card.flip()
                column.append(card)
        while not deck.isEmpty():
            state.stock.append(deck.draw())
        return state

    def totalCards(self):
        return DECK_COPIES * RUN_LENGTH * self.suits

    def cardCount(self):
        return sum(len(c) for c in self.columns) + len(self.stock)


def _encodeCard(card: Card):
    return [card.suit.name, card.rank, card.faceUp]


def _decodeCard(data):
    if not isinstance(data, (list, tuple)) or len(data) != 3:
        raise ValueError(f"malformed card: {data!r}")
    suitName, rank, faceUp = data
    try:
        suit = Suit[suitName]
    except (KeyError, TypeError):
        raise ValueError(f"unknown suit: {suitName!r}") from None
    return Card(suit, rank, bool(faceUp))


def encodeState(state: TableauState) -> dict:
    """
    Encodes the state into JSON-safe values.
    Every distinct card is written once in "cards"; columns, stock and undo records refer to
    cards by index so that the undo log keeps pointing at the very cards on the board.
    """
    cards = []
    index = {}

    def ref(card):
        key = id(card)
        if key not in index:
            index[key] = len(cards)
            cards.append(card)
        return index[key]

    columns = [[ref(c) for c in column] for column in state.columns]
    stock = [ref(c) for c in state.stock]
    undoLog = []
    for move in state.undoLog:
        undoLog.append({
            "from": move.fromColumn,
            "to": move.toColumn,
            "cards": [ref(c) for c in move.movedCards],
            "flip": move.causedFlip,
            "wasFaceUp": move.flippedCardWasFaceUpBefore,
            "flipped": None if move.flippedCard is None else ref(move.flippedCard),
        })
    return {
        "suits": state.suits,
        "score": state.score,
        "completedRuns": state.completedRuns,
        "remainingDeals": state.remainingDeals,
        "cards": [_encodeCard(c) for c in cards],
        "columns": columns,
        "stock": stock,
        "undoLog": undoLog,
    }


def _decodeMove(entry, deref) -> Move:
    if not isinstance(entry, dict):
        raise ValueError(f"malformed undo record: {entry!r}")
    src = entry["from"]
    dest = entry["to"]
    if isinstance(src, bool) or isinstance(dest, bool) or not isinstance(src, int) or not isinstance(dest, int):
        raise ValueError(f"bad undo record columns: {src!r} -> {dest!r}")
    moved = [deref(i) for i in entry["cards"]]
    if src == DEAL_COLUMN and dest == DEAL_COLUMN:
        consistent = len(moved) == COLUMN_COUNT
    elif dest == REMOVED_COLUMN:
        consistent = 0 <= src < COLUMN_COUNT and len(moved) == RUN_LENGTH
    else:
        consistent = 0 <= src < COLUMN_COUNT and 0 <= dest < COLUMN_COUNT and src != dest and len(moved) >= 1
    if not consistent:
        raise ValueError(f"inconsistent undo record: {src} -> {dest} with {len(moved)} card(s)")
    flipped = entry.get("flipped")
    return Move(
        src,
        dest,
        moved,
        bool(entry.get("flip", False)),
        bool(entry.get("wasFaceUp", True)),
        None if flipped is None else deref(flipped),
    )


def decodeState(data: dict) -> TableauState:
    if not isinstance(data, dict):
        raise ValueError("encoded state must be a mapping")
    try:
        state = TableauState(data["suits"])
        cards = [_decodeCard(c) for c in data["cards"]]

        def deref(i):
            if isinstance(i, bool) or not isinstance(i, int) or not 0 <= i < len(cards):
                raise ValueError(f"bad card reference: {i!r}")
            return cards[i]

        columns = data["columns"]
        if len(columns) != COLUMN_COUNT:
            raise ValueError(f"expected {COLUMN_COUNT} columns, got {len(columns)}")
        state.columns = [[deref(i) for i in column] for column in columns]
        state.stock = [deref(i) for i in data["stock"]]
        state.undoLog = [_decodeMove(entry, deref) for entry in data["undoLog"]]
        state.score = int(data["score"])
        state.completedRuns = int(data["completedRuns"])
        state.remainingDeals = max(0, int(data["remainingDeals"]))
    except (KeyError, TypeError) as e:
        raise ValueError(f"malformed state: {e!r}") from e
    if any(c.faceUp for c in state.stock):
        raise ValueError("stock holds a face-up card")
    if state.cardCount() + RUN_LENGTH * state.completedRuns != state.totalCards():
        raise ValueError("card count does not match the suits in play")
    return state
