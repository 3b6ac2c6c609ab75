from __future__ import annotations
import heapq
import time
from collections import deque
from typing import Callable, Dict, List, Optional, Tuple
from .config import (TURN_TIME_MS, MIN_SCORE, MAX_SCORE, EMPTY_VALUE, SPEED_VALUE,
					 ARMOR_VALUE, BOMB_VALUE, OCCUPIED_VALUE, DIRS)
from .game import Board, InvalidMove, EMPTY, POWER_UP, OCCUPIED
from .utils import Action, ACTIONS

# indexed by power-up type
_POWER_UP_VALUES = (SPEED_VALUE, ARMOR_VALUE, BOMB_VALUE)


class ScoreCache:
	"""Heuristic memo keyed by (board encoding, player id); lives as long as its controller."""

	def __init__(self):
		self._scores: Dict[Tuple[str, int], int] = {}
		self.hits = 0
		self.misses = 0

	def get(self, key: Tuple[str, int]) -> Optional[int]:
		score = self._scores.get(key)
		if score is None:
			self.misses += 1
		else:
			self.hits += 1
		return score

	def put(self, key: Tuple[str, int], score: int):
		self._scores[key] = score

	def __contains__(self, key):
		return key in self._scores

	def __len__(self):
		return len(self._scores)


def zone_control(board: Board) -> List[int]:
	"""Territory per player from a lockstep multi-source BFS.

	Each round every frontier pops the cells it held when the round began.
	Walls and trails block; a cell goes to the frontier that reaches it in
	fewer steps. Frontiers advance one ring per round, so the first claim on a
	cell is never beaten later; on a tie the frontier processed first keeps it.
	"""
	n = len(board.players)
	kinds = board.kinds.tolist()
	tags = board.tags.tolist()
	h, w = board.height, board.width
	owner = [[-1] * w for _ in range(h)]
	scores = [0] * n
	frontiers = [deque() for _ in range(n)]
	queued = [set() for _ in range(n)]
	for p in board.players:
		if p.is_alive:
			r, c = p.position.row, p.position.column
			frontiers[p.id].append((r, c)); queued[p.id].add((r, c))

	while any(frontiers):
		for pid, frontier in enumerate(frontiers):
			for _ in range(len(frontier)):
				r, c = frontier.popleft()
				queued[pid].discard((r, c))
				kind = kinds[r][c]
				if kind == EMPTY:
					value = EMPTY_VALUE
				elif kind == POWER_UP:
					value = _POWER_UP_VALUES[tags[r][c]]
				elif kind == OCCUPIED:
					value = OCCUPIED_VALUE
				else:
					continue  # wall or trail
				if owner[r][c] >= 0:
					continue
				owner[r][c] = pid
				scores[pid] += value
				for dr, dc in DIRS:
					rr, cc = r + dr, c + dc
					if not (0 <= rr < h and 0 <= cc < w):
						continue
					if owner[rr][cc] >= 0 or (rr, cc) in queued[pid]:
						continue
					frontier.append((rr, cc)); queued[pid].add((rr, cc))
	return scores


def heuristic(board: Board, player_id: int, cache: Optional[ScoreCache] = None) -> int:
	key = None
	if cache is not None:
		key = (board.encode(), player_id)
		hit = cache.get(key)
		if hit is not None:
			return hit
	if not board.player(player_id).is_alive:
		score = MIN_SCORE
	elif not board.player(1 - player_id).is_alive:
		score = MAX_SCORE
	else:
		zones = zone_control(board)
		rival = max(s for i, s in enumerate(zones) if i != player_id)
		score = zones[player_id] - rival
	if cache is not None:
		cache.put(key, score)
	return score


class SearchNode:
	__slots__ = ("scores", "actions", "state", "key")

	def __init__(self, scores: List[int], actions: List[Action], state: Board):
		self.scores = scores
		self.actions = actions
		self.state = state
		self.key = (tuple(scores), tuple(int(a) for a in actions), state.sort_key())

	# heapq pops the smallest item; invert so the best score trajectory comes out first
	def __lt__(self, other: 'SearchNode'):
		return self.key > other.key

	def __str__(self):
		names = [a.name for a in self.actions]
		return f"SearchNode(scores: {self.scores}, actions: {names})"


class SearchController:
	"""Anytime best-first search with a one-ply worst-case reply per expansion.

	The frontier is ordered by each node's score trajectory, so promising
	lines are deepened first; the search stops on a forced win, an empty
	frontier, or when ``turn_time_ms`` has elapsed since the call began.
	"""

	def __init__(self, turn_time_ms: int = TURN_TIME_MS, cache: Optional[ScoreCache] = None,
				 logger: Optional[Callable[[str], None]] = None):
		self.turn_time_ms = turn_time_ms
		self.cache = cache if cache is not None else ScoreCache()
		self.logger = logger
		self.last_stats: Dict[str, float] = {}

	def select_action(self, board: Board, player_id: int) -> Action:
		t0 = time.time()
		budget = self.turn_time_ms / 1000.0
		them = 1 - player_id
		frontier = [SearchNode([heuristic(board, player_id, self.cache)], [], board)]
		best_action, best_score = Action.UP, MIN_SCORE
		expanded = 0
		won = False
		while frontier and not won and time.time() - t0 < budget:
			node = heapq.heappop(frontier)
			expanded += 1
			for action in ACTIONS:
				try:
					mine = node.state.apply_action(player_id, action)
				except InvalidMove:
					continue
				if not mine.players[player_id].is_alive:
					continue
				actions = node.actions + [action]
				worst_state, worst_score = self._worst_reply(mine, player_id, them)
				if worst_score > best_score:
					best_action, best_score = actions[0], worst_score
					if worst_score == MAX_SCORE:
						won = True
						break
				heapq.heappush(frontier, SearchNode(node.scores + [worst_score], actions, worst_state))

		elapsed_ms = (time.time() - t0) * 1000.0
		self.last_stats = {
			"expanded": expanded,
			"frontier": len(frontier),
			"best_score": best_score,
			"elapsed_ms": elapsed_ms,
			"cache_size": len(self.cache),
		}
		if self.logger is not None:
			self.logger(f"player {player_id}: {best_action.name} score={best_score} "
						f"nodes={expanded} cache={len(self.cache)} time={elapsed_ms:.0f}ms")
		return best_action

	def _worst_reply(self, board: Board, player_id: int, them: int) -> Tuple[Board, int]:
		worst_state, worst_score = board, MAX_SCORE
		for reply in ACTIONS:
			try:
				nxt = board.apply_action(them, reply)
			except InvalidMove:
				nxt = board  # no legal reply: the opponent passes
			score = heuristic(nxt, player_id, self.cache)
			if score < worst_score:
				worst_state, worst_score = nxt, score
		return worst_state, worst_score
