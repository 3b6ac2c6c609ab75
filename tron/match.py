from __future__ import annotations
from typing import Callable, List, Optional, Sequence, Tuple
from .config import MAX_TURNS
from .controller import Controller
from .game import Board, InvalidMove
from .utils import Action


class Match:
	"""Authoritative game loop: one controller per player id, players act in turn."""

	def __init__(self, board: Board, controllers: Sequence[Controller], max_turns: int = MAX_TURNS):
		if len(controllers) != len(board.players):
			raise ValueError(f"{len(board.players)} players but {len(controllers)} controllers")
		self.board = board
		self.controllers = list(controllers)
		self.max_turns = max_turns
		self.turn = 0
		self.alive_ids = [p.id for p in board.players if p.is_alive]
		self.winner: Optional[int] = None
		self.over = len(self.alive_ids) <= 1
		if self.over and self.alive_ids:
			self.winner = self.alive_ids[0]
		self.history: List[Tuple[int, List[Action]]] = []

	def run_turn(self) -> Tuple[int, List[Action]]:
		if self.over:
			raise RuntimeError("match is over")
		active = self.turn % len(self.controllers)
		actions: List[Action] = []
		if active in self.alive_ids:
			# a boosted player moves twice per turn
			n_actions = 2 if self.board.players[active].boost > 0 else 1
			for _ in range(n_actions):
				action = self.controllers[active].select_action(self.board, active)
				try:
					self.board = self.board.apply_action(active, action)
				except InvalidMove:
					break  # cannot act: the rest of the turn is lost
				actions.append(action)
				if not self.board.players[active].is_alive:
					self.alive_ids.remove(active)
					break
		self.turn += 1
		if len(self.alive_ids) <= 1:
			self.over = True
			self.winner = self.alive_ids[0] if self.alive_ids else None
		elif self.turn >= self.max_turns:
			self.over = True  # draw
		self.history.append((active, actions))
		return active, actions

	def play(self, on_turn: Optional[Callable[['Match', int, List[Action]], None]] = None) -> Optional[int]:
		while not self.over:
			pid, actions = self.run_turn()
			if on_turn is not None:
				on_turn(self, pid, actions)
		return self.winner
