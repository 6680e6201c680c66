from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .move import MOVES_BY_ORIGIN, Move
from .piece import BLACK, EMPTY, WHITE, Piece
from .square import BOARD_SIZE, NEIGHBORS, Square, sq


# Default number of moves for each side that results in a draw
DEFAULT_MOVE_LIMIT = 60

# Standard start, bottom row first
INITIAL_PIECES = (
    (EMPTY, BLACK, BLACK, BLACK, BLACK, BLACK, BLACK, EMPTY),
    (WHITE, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, WHITE),
    (WHITE, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, WHITE),
    (WHITE, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, WHITE),
    (WHITE, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, WHITE),
    (WHITE, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, WHITE),
    (WHITE, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, WHITE),
    (EMPTY, BLACK, BLACK, BLACK, BLACK, BLACK, BLACK, EMPTY),
)

STARTPOS_LAYOUT = "-bbbbbb-/w------w/w------w/w------w/w------w/w------w/w------w/-bbbbbb- b"

_ABBREV_TO_PIECE = {p.abbrev: p for p in Piece}


@dataclass(eq=False)
class Board:
    """State of a game of Lines of Action.

    Notes:
    - Squares are 0..63 (a1=0 .. h8=63), row-major from the bottom row.
    - ``move_limit`` counts half-moves; reaching it without a contiguous side
      is a tie.
    - Region and winner caches are derived from ``cells`` only and are
      invalidated by every content change.
    """

    cells: List[Piece]
    side_to_move: Piece
    move_limit: int = 2 * DEFAULT_MOVE_LIMIT
    _history: List[Move] = field(default_factory=list, repr=False)
    _winner_known: bool = field(default=False, repr=False)
    _winner: Optional[Piece] = field(default=None, repr=False)
    _regions_valid: bool = field(default=False, repr=False)
    _white_regions: List[int] = field(default_factory=list, repr=False)
    _black_regions: List[int] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if len(self.cells) != BOARD_SIZE * BOARD_SIZE:
            raise ValueError("board must have 64 cells")
        if self.side_to_move is EMPTY:
            raise ValueError("side to move must be black or white")

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board in the standard initial position with BLACK to move."""
        return cls.from_contents(INITIAL_PIECES, BLACK)

    @classmethod
    def from_contents(cls, contents: Sequence[Sequence[Piece]], turn: Piece) -> "Board":
        """Create a board whose square (col, row) holds ``contents[row][col]``.

        The bottom row comes first, so written array literals appear upside
        down.

        Raises:
            ValueError: If ``contents`` is not 8x8 or ``turn`` is EMPTY.
        """
        if len(contents) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in contents):
            raise ValueError("contents must be 8x8")
        cells = [p for row in contents for p in row]
        return cls(cells=cells, side_to_move=turn)

    @classmethod
    def from_layout(cls, layout: str) -> "Board":
        """Create a board from its compact text layout.

        The layout lists rows top (row 8) to bottom separated by ``/``, one
        character per square (``-``, ``b``, ``w``), followed by a space and the
        side to move (``b`` or ``w``), e.g.
        ``"-bbbbbb-/w------w/w------w/w------w/w------w/w------w/w------w/-bbbbbb- b"``.

        Raises:
            ValueError: If the layout is malformed.
        """
        if not layout or not isinstance(layout, str):
            raise ValueError("layout must be a non-empty string")
        parts = layout.strip().split()
        if len(parts) != 2:
            raise ValueError("layout must have placement and side to move")
        placement, stm = parts
        rows = placement.split("/")
        if len(rows) != BOARD_SIZE:
            raise ValueError("layout must have 8 rows")
        contents: List[List[Piece]] = []
        for row in rows[::-1]:
            if len(row) != BOARD_SIZE:
                raise ValueError(f"layout row must have 8 squares: {row!r}")
            try:
                contents.append([_ABBREV_TO_PIECE[ch] for ch in row])
            except KeyError as e:
                raise ValueError(f"invalid piece in layout: {e.args[0]!r}") from e
        if stm not in (BLACK.abbrev, WHITE.abbrev):
            raise ValueError("side to move must be 'b' or 'w'")
        return cls.from_contents(contents, _ABBREV_TO_PIECE[stm])

    def to_layout(self) -> str:
        rows = []
        for r in range(BOARD_SIZE - 1, -1, -1):
            rows.append(
                "".join(self.cells[r * BOARD_SIZE + c].abbrev for c in range(BOARD_SIZE))
            )
        return "/".join(rows) + " " + self.side_to_move.abbrev

    def copy(self) -> "Board":
        """Return an independent board with the same contents, history and turn."""
        return Board(
            cells=list(self.cells),
            side_to_move=self.side_to_move,
            move_limit=self.move_limit,
            _history=list(self._history),
            _winner_known=self._winner_known,
            _winner=self._winner,
            _regions_valid=self._regions_valid,
            _white_regions=list(self._white_regions),
            _black_regions=list(self._black_regions),
        )

    # --- Accessors ---
    def get(self, square: Square) -> Piece:
        return self.cells[square.index]

    def set(self, square: Square, piece: Piece, next_side: Optional[Piece] = None) -> None:
        """Put ``piece`` on ``square`` and, if given, make ``next_side`` the side to move."""
        if next_side is EMPTY:
            raise ValueError("side to move must be black or white")
        self.cells[square.index] = piece
        if next_side is not None:
            self.side_to_move = next_side
        self._invalidate()

    def turn(self) -> Piece:
        return self.side_to_move

    def moves_made(self) -> int:
        return len(self._history)

    def history(self) -> List[Move]:
        return list(self._history)

    def set_move_limit(self, limit: int) -> None:
        """Set the per-side move limit after which the game is a tie.

        Raises:
            ValueError: If ``2 * limit`` does not exceed the moves already made.
        """
        if 2 * limit <= self.moves_made():
            raise ValueError("move limit too small")
        self.move_limit = 2 * limit
        # Only a tie depends on the limit; a recorded win stands
        if self._winner is EMPTY:
            self._winner_known = False
            self._winner = None

    # --- Legality ---
    def is_legal_squares(self, from_sq: Optional[Square], to_sq: Optional[Square]) -> bool:
        """Return True iff moving from ``from_sq`` to ``to_sq`` is legal for the side to move."""
        if from_sq is None or to_sq is None:
            return False
        turn = self.side_to_move
        if self.cells[from_sq.index] is not turn:
            return False
        if self.cells[to_sq.index] is turn:
            return False
        if not from_sq.is_valid_move(to_sq):
            return False
        if self._opposite_blocked(from_sq, to_sq):
            return False
        return self._pieces_along_line(from_sq, to_sq) == from_sq.distance(to_sq)

    def is_legal(self, move: Move) -> bool:
        """Return True iff ``move`` is legal; a capture flag must match the board."""
        if move.is_capture and self.cells[move.to_sq.index] is not self.side_to_move.opposite():
            return False
        return self.is_legal_squares(move.from_sq, move.to_sq)

    def legal_moves(self) -> List[Move]:
        """Return the legal moves in move-universe order (origin, then destination)."""
        turn = self.side_to_move
        legal: List[Move] = []
        for idx, piece in enumerate(self.cells):
            if piece is not turn:
                continue
            for m in MOVES_BY_ORIGIN[idx]:
                if self.is_legal(m):
                    legal.append(m)
        return legal

    def _opposite_blocked(self, from_sq: Square, to_sq: Square) -> bool:
        opponent = self.side_to_move.opposite()
        direction = from_sq.direction(to_sq)
        for steps in range(1, from_sq.distance(to_sq)):
            between = from_sq.move_dest(direction, steps)
            if between is not None and self.cells[between.index] is opponent:
                return True
        return False

    def _pieces_along_line(self, from_sq: Square, to_sq: Square) -> int:
        count = 1
        for direction in (from_sq.direction(to_sq), to_sq.direction(from_sq)):
            cur: Optional[Square] = from_sq.move_dest(direction, 1)
            while cur is not None:
                if self.cells[cur.index] is not EMPTY:
                    count += 1
                cur = cur.move_dest(direction, 1)
        return count

    # --- Mutation ---
    def make_move(self, move: Move) -> None:
        """Apply ``move`` to this board in place.

        The move is recorded as a capture whenever its destination holds an
        opposing piece. After the move, the mover wins if its pieces are
        contiguous, otherwise the opponent wins if theirs are.

        Raises:
            ValueError: If ``move`` is not legal; the board is left untouched.
        """
        if not self.is_legal(move):
            raise ValueError(f"illegal move: {move}")
        mover = self.side_to_move
        opponent = mover.opposite()
        if self.cells[move.to_sq.index] is opponent:
            move = move.capture_move()
        self._history.append(move)
        self.cells[move.to_sq.index] = self.cells[move.from_sq.index]
        self.cells[move.from_sq.index] = EMPTY
        self._invalidate()

        if self.pieces_contiguous(mover):
            self._winner_known = True
            self._winner = mover
        elif self.pieces_contiguous(opponent):
            self._winner_known = True
            self._winner = opponent

        self.side_to_move = opponent

    def retract(self) -> None:
        """Undo the last move, restoring any captured piece.

        Raises:
            ValueError: If no move has been made.
        """
        if not self._history:
            raise ValueError("no move to retract")
        m = self._history.pop()
        mover = self.cells[m.to_sq.index]
        self.cells[m.from_sq.index] = mover
        self.cells[m.to_sq.index] = mover.opposite() if m.is_capture else EMPTY
        self._invalidate()
        self._compute_regions()
        self.side_to_move = self.side_to_move.opposite()

    def apply(self, move: Move) -> "Board":
        """Return a new Board with ``move`` applied; this board is unchanged.

        Raises:
            ValueError: If ``move`` is not legal.
        """
        new_board = self.copy()
        new_board.make_move(move)
        return new_board

    def _invalidate(self) -> None:
        self._regions_valid = False
        self._winner_known = False
        self._winner = None

    # --- Termination and regions ---
    def winner(self) -> Optional[Piece]:
        """Return the winning side, EMPTY for a tie, or None while the game goes on.

        The move-limit tie is considered first; a contiguous side found
        afterwards (WHITE, then BLACK) overrides it.
        """
        if not self._winner_known:
            if self.moves_made() >= self.move_limit:
                self._winner = EMPTY
                self._winner_known = True
            if self.pieces_contiguous(WHITE):
                self._winner = WHITE
                self._winner_known = True
            if self.pieces_contiguous(BLACK):
                self._winner = BLACK
                self._winner_known = True
        return self._winner

    def game_over(self) -> bool:
        return self.winner() is not None

    def pieces_contiguous(self, side: Piece) -> bool:
        """Return True iff ``side`` has exactly one region (never with zero pieces)."""
        return len(self.region_sizes(side)) == 1

    def region_sizes(self, side: Piece) -> List[int]:
        """Return the sizes of ``side``'s connected regions, largest first."""
        self._compute_regions()
        if side is WHITE:
            return list(self._white_regions)
        if side is BLACK:
            return list(self._black_regions)
        raise ValueError("regions are defined for black or white only")

    def _compute_regions(self) -> None:
        if self._regions_valid:
            return
        self._white_regions = self._regions_of(WHITE)
        self._black_regions = self._regions_of(BLACK)
        self._regions_valid = True

    def _regions_of(self, side: Piece) -> List[int]:
        cells = self.cells
        visited = [False] * len(cells)
        sizes: List[int] = []
        for start, piece in enumerate(cells):
            if piece is not side or visited[start]:
                continue
            size = 0
            stack = [start]
            visited[start] = True
            while stack:
                idx = stack.pop()
                size += 1
                for n in NEIGHBORS[idx]:
                    if not visited[n] and cells[n] is side:
                        visited[n] = True
                        stack.append(n)
            sizes.append(size)
        sizes.sort(reverse=True)
        return sizes

    # --- Value semantics and display ---
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells and self.side_to_move is other.side_to_move

    def __hash__(self) -> int:
        return hash((tuple(self.cells), self.side_to_move))

    def __str__(self) -> str:
        lines = ["==="]
        for r in range(BOARD_SIZE - 1, -1, -1):
            lines.append(
                "    " + "".join(f"{self.get(sq(c, r)).abbrev} " for c in range(BOARD_SIZE))
            )
        lines.append(f"Next move: {self.side_to_move.full_name}")
        lines.append("===")
        return "\n".join(lines)

    def piece_count(self, side: Piece) -> int:
        return sum(1 for p in self.cells if p is side)
