from host.view_model import AnimationEvent, CardView, ColumnView, GameViewModel
from tableau.Core import Move
from tableau.Engine import Engine


class EngineAdapter:
    """Bridges the engine state and its undo records to a renderer-friendly model."""

    @staticmethod
    def snapshot(engine: Engine) -> GameViewModel:
        state = engine.state
        columns = []
        for column in state.columns:
            cards = tuple(
                CardView(suit=card.suit.name, rank=card.rank, face_up=card.faceUp)
                for card in column
            )
            columns.append(ColumnView(cards=cards))
        return GameViewModel(
            stock_count=engine.stockCount(),
            score=state.score,
            completed_runs=state.completedRuns,
            remaining_deals=state.remainingDeals,
            won=engine.isWon(),
            columns=tuple(columns),
        )

    @staticmethod
    def move_to_animation(move: Move) -> AnimationEvent:
        if move.isDeal():
            return AnimationEvent(
                type="DEAL",
                payload={"count": len(move.movedCards)},
            )
        if move.isRunRemoval():
            return AnimationEvent(
                type="COMPLETE_RUN",
                payload={"column": move.fromColumn, "suit": move.movedCards[0].suit.name},
            )
        return AnimationEvent(
            type="MOVE",
            payload={
                "src": move.fromColumn,
                "dest": move.toColumn,
                "count": len(move.movedCards),
                "revealed": move.causedFlip,
            },
        )
