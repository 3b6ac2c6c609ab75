from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Union
from .utils import Position, DeadActor


@dataclass(frozen=True, order=True)
class Alive:
	position: Position
	boost: int = 0
	armor: int = 0


@dataclass(frozen=True)
class Dead:
	pass


PlayerState = Union[Alive, Dead]
DEAD = Dead()


@dataclass(frozen=True)
class Player:
	id: int
	state: PlayerState

	@property
	def is_alive(self) -> bool:
		return isinstance(self.state, Alive)

	@property
	def position(self) -> Optional[Position]:
		return self.state.position if self.is_alive else None

	@property
	def boost(self) -> int:
		return self.state.boost if self.is_alive else 0

	@property
	def armor(self) -> int:
		return self.state.armor if self.is_alive else 0

	def _alive(self) -> Alive:
		if not self.is_alive:
			raise DeadActor(f"player {self.id} is dead")
		return self.state

	def moved_to(self, position: Position) -> 'Player':
		return replace(self, state=replace(self._alive(), position=position))

	def grant_boost(self, duration: int) -> 'Player':
		# never consumed: one pickup keeps the extra action for the rest of the match
		st = self._alive()
		return replace(self, state=replace(st, boost=st.boost + duration))

	def grant_armor(self) -> 'Player':
		st = self._alive()
		return replace(self, state=replace(st, armor=st.armor + 1))

	def take_damage(self) -> 'Player':
		st = self._alive()
		if st.armor > 0:
			return replace(self, state=replace(st, armor=st.armor - 1))
		return replace(self, state=DEAD)

	def killed(self) -> 'Player':
		self._alive()
		return replace(self, state=DEAD)

	def sort_key(self):
		st = self.state
		if self.is_alive:
			return (self.id, 1, st.position.row, st.position.column, st.boost, st.armor)
		return (self.id, 0, 0, 0, 0, 0)

	def __str__(self):
		if not self.is_alive:
			return f"Player({self.id}: DEAD)"
		st = self.state
		return f"Player({self.id}: {st.boost}-{st.armor} @{st.position})"


def new_player(pid: int, position: Position) -> Player:
	return Player(pid, Alive(position))
