import enum
from dataclasses import dataclass
from typing import List, Optional, Tuple


class Player(enum.Enum):
    NONE = " "
    O = "O"
    X = "X"

    def opposite(self) -> "Player":
        return Player.O if self == Player.X else Player.X


class MoveResult(enum.Enum):
    NONE = "none"
    INVALID = "invalid"
    WIN_O = "winO"
    WIN_X = "winX"
    DRAW = "draw"


class Outcome(enum.Enum):
    WINNER = "winner"
    DRAW = "draw"
    NEXT_PLAYER = "next"


Board = Tuple[Player, ...]

BOARD_SIZE = 9

WIN_CHECK_AXES = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6)
)


@dataclass(frozen=True)
class Status:
    outcome: Outcome
    player: Optional[Player] = None

    @property
    def label(self) -> str:
        match self.outcome:
            case Outcome.WINNER:
                return f"Winner: {self.player.value}"
            case Outcome.DRAW:
                return "Draw! No one wins."
            case _:
                return f"Next player: {self.player.value}"


def new_board() -> Board:
    return (Player.NONE,) * BOARD_SIZE


def apply_move(board: Board, index: int, player: Player) -> Optional[Board]:
    """Return a new board with `player` at `index`, or None if the move is rejected."""
    if not 0 <= index < BOARD_SIZE:
        raise ValueError(f"Cell index {index} out of range")
    if player == Player.NONE:
        raise ValueError("Cannot place an empty mark")

    if board[index] != Player.NONE or winner(board) is not None:
        return None

    squares = list(board)
    squares[index] = player
    return tuple(squares)


def winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    for axis in WIN_CHECK_AXES:
        players = [board[i] for i in axis]
        if players[0] == players[1] == players[2] and players[0] != Player.NONE:
            return axis

    return None


def winner(board: Board) -> Optional[Player]:
    axis = winning_line(board)
    if axis is None:
        return None
    return board[axis[0]]


def is_full(board: Board) -> bool:
    return Player.NONE not in board


def is_draw(board: Board) -> bool:
    return winner(board) is None and is_full(board)


def next_player(board: Board) -> Player:
    return Player.X if board.count(Player.X) == board.count(Player.O) else Player.O


def status(board: Board, to_move: Player = None) -> Status:
    """`to_move` overrides the mark-count guess for whose turn it is."""
    mark = winner(board)
    if mark is not None:
        return Status(Outcome.WINNER, mark)

    if is_full(board):
        return Status(Outcome.DRAW)

    return Status(Outcome.NEXT_PLAYER, next_player(board) if to_move is None else to_move)


def move_result(board: Board) -> MoveResult:
    mark = winner(board)
    if mark is not None:
        return MoveResult.WIN_O if mark == Player.O else MoveResult.WIN_X

    if is_full(board):
        return MoveResult.DRAW

    return MoveResult.NONE


def format_board(board: Board) -> List[str]:
    return ["".join(player.value for player in board[row:row + 3]) for row in range(0, BOARD_SIZE, 3)]


if __name__ == "__main__":
    board = new_board()
    player = Player.X
    moves = (0, 1, 4, 2, 8)

    for move in moves:
        board = apply_move(board, move, player)
        player = player.opposite()
        for row in format_board(board):
            print(row)

        print(move_result(board))

    print(status(board).label, winning_line(board))
