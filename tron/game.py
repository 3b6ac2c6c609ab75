from __future__ import annotations
import random
import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple
from .config import BOARD_HEIGHT, BOARD_WIDTH, BLAST, BOOST_DURATION
from .utils import Position, Action, InvalidMove, DeadActor, in_bounds
from .player import Player, new_player

# power-up types
SPEED, ARMOR, BOMB = 0, 1, 2
# cell kinds
EMPTY, POWER_UP, WALL, OWNED, OCCUPIED = 0, 1, 2, 3, 4

_PU_SYMBOLS = np.array(['S', 'A', 'B'])
_DIGITS = np.array(list('0123456789'))


@dataclass(frozen=True, order=True)
class PowerUp:
	ptype: int  # 0 speed, 1 armor, 2 bomb
	duration: int = 0  # only for speed

	@property
	def symbol(self) -> str:
		return str(_PU_SYMBOLS[self.ptype])


def double_speed(duration: int = BOOST_DURATION) -> PowerUp:
	return PowerUp(SPEED, duration)


def armor() -> PowerUp:
	return PowerUp(ARMOR)


def bomb() -> PowerUp:
	return PowerUp(BOMB)


@dataclass(frozen=True)
class CellState:
	kind: int
	player_id: Optional[int] = None  # OWNED / OCCUPIED
	power_up: Optional[PowerUp] = None  # POWER_UP

	@staticmethod
	def empty() -> 'CellState':
		return CellState(EMPTY)

	@staticmethod
	def wall() -> 'CellState':
		return CellState(WALL)

	@staticmethod
	def owned(pid: int) -> 'CellState':
		return CellState(OWNED, player_id=pid)

	@staticmethod
	def occupied(pid: int) -> 'CellState':
		return CellState(OCCUPIED, player_id=pid)

	@staticmethod
	def power(power_up: PowerUp) -> 'CellState':
		return CellState(POWER_UP, power_up=power_up)

	@property
	def symbol(self) -> str:
		if self.kind == POWER_UP:
			return self.power_up.symbol
		if self.kind in (WALL, OWNED):
			return '#'
		if self.kind == OCCUPIED:
			return str(self.player_id)[-1]
		return '*'


@dataclass(frozen=True)
class Cell:
	position: Position
	state: CellState


class Board:
	"""Grid of cell states plus the player roster.

	Every transition returns a new board; the receiver is never modified, so
	search frontiers can hold many divergent boards at once.
	"""

	def __init__(self, height: int = BOARD_HEIGHT, width: int = BOARD_WIDTH):
		if height <= 0 or width <= 0:
			raise ValueError(f"board must have positive dimensions, got {height}x{width}")
		if height * width < 2:
			raise ValueError("board needs at least two cells to seed both players")
		self.height = height
		self.width = width
		# kinds[r,c]: cell kind; tags[r,c]: player id (OWNED/OCCUPIED) or power-up type
		self.kinds = np.full((height, width), EMPTY, dtype=np.int8)
		self.tags = np.zeros((height, width), dtype=np.int16)
		# durations[r,c]: speed power-up duration
		self.durations = np.zeros((height, width), dtype=np.int32)
		self.players: Tuple[Player, ...] = (
			new_player(0, Position(0, 0)),
			new_player(1, Position(height - 1, width - 1)),
		)
		for p in self.players:
			self._set(p.position, CellState.occupied(p.id))

	def clone(self) -> 'Board':
		b = Board.__new__(Board)
		b.height = self.height
		b.width = self.width
		b.kinds = self.kinds.copy()
		b.tags = self.tags.copy()
		b.durations = self.durations.copy()
		b.players = self.players
		return b

	def player(self, pid: int) -> Player:
		if not 0 <= pid < len(self.players):
			raise InvalidMove(f"unknown player {pid}")
		return self.players[pid]

	def _check(self, p: Position):
		if not in_bounds(p, self.height, self.width):
			raise InvalidMove(f"{p} is outside the {self.height}x{self.width} grid")

	def state_at(self, p: Position) -> CellState:
		self._check(p)
		k = int(self.kinds[p.row, p.column])
		t = int(self.tags[p.row, p.column])
		if k == POWER_UP:
			return CellState.power(PowerUp(t, int(self.durations[p.row, p.column])))
		if k in (OWNED, OCCUPIED):
			return CellState(k, player_id=t)
		return CellState(k)

	def cell(self, p: Position) -> Cell:
		return Cell(p, self.state_at(p))

	def _set(self, p: Position, state: CellState):
		self._check(p)
		r, c = p.row, p.column
		self.kinds[r, c] = state.kind
		self.tags[r, c] = 0; self.durations[r, c] = 0
		if state.kind == POWER_UP:
			self.tags[r, c] = state.power_up.ptype
			self.durations[r, c] = state.power_up.duration
		elif state.kind in (OWNED, OCCUPIED):
			self.tags[r, c] = state.player_id

	def place(self, p: Position, state: CellState) -> 'Board':
		"""Return a copy with one cell set; used for scenario setup."""
		if state.kind == OCCUPIED:
			raise ValueError("occupied cells are only created by moving a player")
		if self.state_at(p).kind == OCCUPIED:
			raise ValueError(f"{p} holds a player")
		if state.player_id is not None and not 0 <= state.player_id < len(self.players):
			raise ValueError(f"unknown player {state.player_id}")
		b = self.clone()
		b._set(p, state)
		return b

	def apply_action(self, player_id: int, action: Action) -> 'Board':
		player = self.player(player_id)
		if not player.is_alive:
			raise DeadActor(f"player {player_id} is dead")
		return self.move_player(player_id, action.offset_position(player.position))

	def move_player(self, player_id: int, destination: Position) -> 'Board':
		player = self.player(player_id)
		if not player.is_alive:
			raise DeadActor(f"player {player_id} is dead")
		self._check(destination)
		b = self.clone()
		b._set(player.position, CellState.owned(player_id))
		# effects come from the destination as it was before the move lands
		prior = b.state_at(destination)
		if prior.kind == POWER_UP:
			pu = prior.power_up
			if pu.ptype == SPEED:
				player = player.grant_boost(pu.duration)
			elif pu.ptype == ARMOR:
				player = player.grant_armor()
			else:
				b._explode_around(destination)
		elif prior.kind in (WALL, OWNED):
			player = player.take_damage()
		elif prior.kind == OCCUPIED:
			player = player.killed()
		if player.is_alive:
			player = player.moved_to(destination)
			b._set(destination, CellState.occupied(player_id))
		b.players = self.players[:player_id] + (player,) + self.players[player_id + 1:]
		return b

	def _explode_around(self, center: Position):
		for dr, dc in BLAST:
			try:
				p = center.offset(dr, dc)
			except InvalidMove:
				continue
			if not in_bounds(p, self.height, self.width):
				continue
			if self.kinds[p.row, p.column] in (POWER_UP, WALL, OWNED):
				self._set(p, CellState.empty())

	def encode(self) -> str:
		sym = np.full(self.kinds.shape, '*', dtype='<U1')
		sym[(self.kinds == WALL) | (self.kinds == OWNED)] = '#'
		occ = self.kinds == OCCUPIED
		sym[occ] = _DIGITS[self.tags[occ] % 10]
		pu = self.kinds == POWER_UP
		sym[pu] = _PU_SYMBOLS[self.tags[pu]]
		return ''.join(''.join(row) + '\n' for row in sym)

	def sort_key(self):
		return (
			self.height, self.width,
			self.kinds.tobytes(), self.tags.tobytes(), self.durations.tobytes(),
			tuple(p.sort_key() for p in self.players),
		)

	def __eq__(self, other):
		if not isinstance(other, Board):
			return NotImplemented
		return self.sort_key() == other.sort_key()

	def __lt__(self, other: 'Board'):
		return self.sort_key() < other.sort_key()

	__hash__ = None

	def __str__(self):
		return self.encode()

	def __repr__(self):
		roster = ", ".join(str(p) for p in self.players)
		return f"Board({self.height}x{self.width}, [{roster}])"


def random_board(height: int = BOARD_HEIGHT, width: int = BOARD_WIDTH, n_items: int = 0,
				 seed: Optional[int] = None) -> Board:
	"""Default board with walls and power-ups scattered over its empty cells."""
	rng = random.Random(seed)
	board = Board(height, width)
	free = [Position(r, c) for r in range(height) for c in range(width)
			if board.kinds[r, c] == EMPTY]
	items = [
		CellState.wall(),
		CellState.power(double_speed()),
		CellState.power(armor()),
		CellState.power(bomb()),
	]
	for p in rng.sample(free, min(n_items, len(free))):
		board = board.place(p, rng.choice(items))
	return board
