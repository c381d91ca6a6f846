"""
Turn-based game loop for two players over an abstract board.

The loop depends only on the Board and Player protocols; concrete
implementations are passed in by the caller.

Phases: AWAITING_MOVE -> APPLYING -> EVALUATING -> AWAITING_MOVE (other player)
or FINISHED once the board reports a win or a draw.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .protocols import (
    PLAYER_ONE,
    PLAYER_TWO,
    Board,
    InvalidMove,
    Outcome,
    Player,
    TooManyInvalidMoves,
    other_player,
)


class Phase(enum.Enum):
    AWAITING_MOVE = "awaiting_move"
    APPLYING = "applying"
    EVALUATING = "evaluating"
    FINISHED = "finished"


class InvalidMovePolicy(enum.Enum):
    RAISE = "raise"
    REPROMPT = "reprompt"


class GameFinished(RuntimeError):
    pass


@dataclass
class TurnRecord:
    ply: int
    player: int
    move: Any
    state: Any


@dataclass
class GameResult:
    outcome: Outcome
    final_state: Any
    history: List[TurnRecord] = field(default_factory=list)
    invalid_attempts: int = 0

    @property
    def winner(self) -> Optional[int]:
        return self.outcome.winner

    @property
    def plies(self) -> int:
        return len(self.history)


class GameLoop:
    """Alternate turns between two players until the board reports a terminal outcome.

    With InvalidMovePolicy.RAISE a rejected move propagates to the caller and
    the same player stays on turn. With REPROMPT the player is told about the
    rejection (if it has a notify_invalid hook) and asked again, up to
    max_invalid_attempts consecutive rejections.
    """

    def __init__(
        self,
        board: Board,
        player_one: Player,
        player_two: Player,
        on_invalid: InvalidMovePolicy = InvalidMovePolicy.RAISE,
        max_invalid_attempts: int = 3,
    ):
        if max_invalid_attempts < 1:
            raise ValueError("max_invalid_attempts must be >= 1")
        self.board = board
        self.players = {PLAYER_ONE: player_one, PLAYER_TWO: player_two}
        self.on_invalid = InvalidMovePolicy(on_invalid)
        self.max_invalid_attempts = max_invalid_attempts
        self.state = board.initial_state()
        self.current = PLAYER_ONE
        self.history: List[TurnRecord] = []
        self.invalid_attempts = 0
        self.outcome = board.outcome(self.state)
        self.phase = Phase.FINISHED if self.outcome.is_terminal else Phase.AWAITING_MOVE

    @property
    def finished(self) -> bool:
        return self.phase is Phase.FINISHED

    def _obtain_move(self) -> Any:
        player = self.players[self.current]
        rejected = 0
        while True:
            move = player.choose_move(self.state, self.current)
            self.phase = Phase.APPLYING
            try:
                new_state = self.board.apply(self.state, move, self.current)
            except InvalidMove as e:
                self.phase = Phase.AWAITING_MOVE
                self.invalid_attempts += 1
                rejected += 1
                logging.warning("Rejected move %r by %s: %s", move, self.current, e.reason)
                if self.on_invalid is InvalidMovePolicy.RAISE:
                    raise
                if rejected >= self.max_invalid_attempts:
                    raise TooManyInvalidMoves(
                        move, self.current, f"{rejected} invalid moves in a row"
                    ) from e
                notify = getattr(player, "notify_invalid", None)
                if notify is not None:
                    notify(move, e)
                continue
            return move, new_state

    def step(self) -> TurnRecord:
        """Play exactly one turn for the player on move."""
        if self.finished:
            raise GameFinished(f"game already finished: {self.outcome}")
        move, new_state = self._obtain_move()
        self.state = new_state
        self.phase = Phase.EVALUATING
        record = TurnRecord(ply=len(self.history) + 1, player=self.current, move=move, state=new_state)
        self.history.append(record)
        logging.debug("ply=%d player=%s move=%s", record.ply, self.current, move)
        self.outcome = self.board.outcome(self.state)
        if self.outcome.is_terminal:
            self.phase = Phase.FINISHED
            logging.info("Game over after %d plies: %s", record.ply, self.outcome)
        else:
            self.current = other_player(self.current)
            self.phase = Phase.AWAITING_MOVE
        return record

    def run(self) -> GameResult:
        while not self.finished:
            self.step()
        return self.result()

    def result(self) -> GameResult:
        return GameResult(
            outcome=self.outcome,
            final_state=self.state,
            history=list(self.history),
            invalid_attempts=self.invalid_attempts,
        )
