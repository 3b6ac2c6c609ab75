from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from .config import DIRS


class InvalidMove(Exception):
	"""Destination off the grid, or the move was asked of a dead player."""


class DeadActor(InvalidMove):
	pass


@dataclass(frozen=True, order=True)
class Position:
	row: int
	column: int

	def offset(self, d_row: int, d_col: int) -> 'Position':
		# only the near edges are checked here; the far edges are caught by the board lookup
		r, c = self.row + d_row, self.column + d_col
		if r < 0 or c < 0:
			raise InvalidMove(f"offset ({d_row}, {d_col}) from {self} leaves the grid")
		return Position(r, c)

	def __str__(self):
		return f"({self.row}, {self.column})"


class Action(IntEnum):
	UP = 0
	DOWN = 1
	LEFT = 2
	RIGHT = 3

	@property
	def delta(self):
		return _DELTAS[self]

	def offset_position(self, position: Position) -> Position:
		return position.offset(*self.delta)


_DELTAS = {
	Action.UP: DIRS[0],
	Action.RIGHT: DIRS[1],
	Action.DOWN: DIRS[2],
	Action.LEFT: DIRS[3],
}

# clockwise candidate order shared by every controller
ACTIONS = (Action.UP, Action.RIGHT, Action.DOWN, Action.LEFT)


def in_bounds(p: Position, height: int, width: int) -> bool:
	return 0 <= p.row < height and 0 <= p.column < width
