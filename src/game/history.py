from dataclasses import dataclass
from typing import List, Optional, Tuple

from game.engine import Board, MoveResult, Player, Status, apply_move, move_result, new_board, status, winning_line


@dataclass(frozen=True)
class HistoryStep:
    squares: Board
    position: Optional[int] = None

    @property
    def coordinates(self) -> Optional[Tuple[int, int]]:
        """1-based (row, column) of the cell played to reach this step."""
        if self.position is None:
            return None
        return self.position // 3 + 1, self.position % 3 + 1


@dataclass(frozen=True)
class MoveEntry:
    move: int
    description: str
    is_current: bool
    position: Optional[int]


def initial_step() -> HistoryStep:
    return HistoryStep(new_board(), None)


class GameHistory:
    """Board snapshots of one game plus a cursor into them.

    Playing from an earlier cursor drops every step after it before the new
    step is appended. Jumping only moves the cursor. `steps` is replaced, never
    mutated, so snapshots handed out earlier stay valid.
    """

    def __init__(self) -> None:
        self.steps: Tuple[HistoryStep, ...] = (initial_step(),)
        self.cursor: int = 0

    def __len__(self) -> int:
        return len(self.steps)

    @property
    def current(self) -> HistoryStep:
        return self.steps[self.cursor]

    @property
    def squares(self) -> Board:
        return self.current.squares

    @property
    def next_player(self) -> Player:
        return Player.X if self.cursor % 2 == 0 else Player.O

    @property
    def status(self) -> Status:
        return status(self.squares, self.next_player)

    @property
    def winning_line(self) -> Optional[Tuple[int, int, int]]:
        return winning_line(self.squares)

    def play(self, cell_idx: int) -> MoveResult:
        next_squares = apply_move(self.squares, cell_idx, self.next_player)
        if next_squares is None:
            return MoveResult.INVALID

        self.steps = self.steps[:self.cursor + 1] + (HistoryStep(next_squares, cell_idx),)
        self.cursor = len(self.steps) - 1

        return move_result(next_squares)

    def jump(self, target: int) -> None:
        if not 0 <= target < len(self.steps):
            raise ValueError(f"No move #{target} in history")

        self.cursor = target

    def restart(self) -> None:
        self.steps = (initial_step(),)
        self.cursor = 0


def describe_step(move: int, step: HistoryStep, is_current: bool) -> str:
    position = ""
    if step.coordinates is not None:
        row, column = step.coordinates
        position = f" ({row}, {column})"

    if is_current:
        return f"You are at move #{move}{position}"
    if move > 0:
        return f"Go to move #{move}{position}"
    return "Go to game start"


def move_list(history: GameHistory, ascending: bool = True) -> List[MoveEntry]:
    entries = [
        MoveEntry(move, describe_step(move, step, move == history.cursor), move == history.cursor, step.position)
        for move, step in enumerate(history.steps)
    ]

    return entries if ascending else entries[::-1]
