from __future__ import annotations
from typing import Protocol
from .game import Board, InvalidMove
from .utils import Action, ACTIONS


class Controller(Protocol):
	def select_action(self, board: Board, player_id: int) -> Action:
		...


class ClockwiseController:
	"""Take the first move, clockwise from up, that keeps the player alive."""

	def select_action(self, board: Board, player_id: int) -> Action:
		for action in ACTIONS:
			try:
				nxt = board.apply_action(player_id, action)
			except InvalidMove:
				continue
			if nxt.players[player_id].is_alive:
				return action
		return Action.UP
