from __future__ import annotations
import argparse, os
from datetime import datetime
from typing import Callable, Dict, Optional
from tqdm import trange
from .config import BOARD_HEIGHT, BOARD_WIDTH, DEFAULT_ITEMS, TURN_TIME_MS
from .controller import ClockwiseController, Controller
from .game import random_board
from .match import Match
from .search import SearchController
from .render import print_board

KINDS = ("search", "clockwise")


def make_controller(kind: str, turn_ms: int = TURN_TIME_MS,
					logger: Optional[Callable[[str], None]] = None) -> Controller:
	if kind == "search":
		return SearchController(turn_time_ms=turn_ms, logger=logger)
	if kind == "clockwise":
		return ClockwiseController()
	raise ValueError(f"unknown controller kind: {kind!r} (expected one of {KINDS})")


def run_arena(kind_a: str, kind_b: str, games: int, height: int = BOARD_HEIGHT, width: int = BOARD_WIDTH,
			  items: int = DEFAULT_ITEMS, turn_ms: int = TURN_TIME_MS, seed: Optional[int] = None,
			  debug: bool = False, logger: Optional[Callable[[str], None]] = None) -> Dict[str, int]:
	tally = {"a": 0, "b": 0, "draw": 0}
	for g in trange(games, desc="arena"):
		game_seed = None if seed is None else seed + g
		board = random_board(height, width, items, seed=game_seed)
		# Alternate seats: even -> kind_a is player0; odd -> kind_b is player0
		a_is_p0 = (g % 2 == 0)
		search_logger = logger if debug else None
		ctrl_a = make_controller(kind_a, turn_ms, search_logger)
		ctrl_b = make_controller(kind_b, turn_ms, search_logger)
		match = Match(board, [ctrl_a, ctrl_b] if a_is_p0 else [ctrl_b, ctrl_a])

		on_turn = None
		if debug:
			cur_time = datetime.now().strftime('%Y%m%d.%H%M%S') + f".g{g:03d}"
			print_board(match.board, cur_time, 0)

			def on_turn(m: Match, pid: int, actions):
				names = [a.name for a in actions]
				if logger is not None:
					logger(f"[turn {m.turn}] player {pid}: {names}\n{m.board}")
				print_board(m.board, cur_time, m.turn)

		winner = match.play(on_turn)
		if winner is None:
			tally["draw"] += 1
			result = "draw"
		else:
			a_won = (winner == 0) == a_is_p0
			tally["a" if a_won else "b"] += 1
			result = "a" if a_won else "b"
		if logger is not None:
			logger(f"[GAME {g:03d}] a_is_p0={a_is_p0} winner={winner} -> {result} turns={match.turn}")
	return tally


def main():
	ap = argparse.ArgumentParser()
	ap.add_argument('--a', type=str, default='search', choices=KINDS, help='Controller kind for side a')
	ap.add_argument('--b', type=str, default='clockwise', choices=KINDS, help='Controller kind for side b')
	ap.add_argument('--games', type=int, default=10, help='Number of matches')
	ap.add_argument('--height', type=int, default=BOARD_HEIGHT)
	ap.add_argument('--width', type=int, default=BOARD_WIDTH)
	ap.add_argument('--items', type=int, default=DEFAULT_ITEMS, help='Walls and power-ups scattered per board')
	ap.add_argument('--turn-ms', type=int, default=TURN_TIME_MS, help='Search time budget per action')
	ap.add_argument('--seed', type=int, default=None)
	ap.add_argument('--debug', action='store_true', help='Log every turn and render frames to logs/')
	ap.add_argument('--log', type=str, default=None, help='Optional file to append log lines to')
	args = ap.parse_args()

	if args.games <= 0:
		raise RuntimeError('--games must be positive')

	log_f = None
	if args.log is not None:
		log_dir = os.path.dirname(args.log)
		if log_dir:
			os.makedirs(log_dir, exist_ok=True)
		log_f = open(args.log, "a", encoding="utf-8")

	def logger(msg: str):
		print(msg)
		if log_f:
			log_f.write(msg + "\n"); log_f.flush()

	tally = run_arena(args.a, args.b, games=args.games, height=args.height, width=args.width,
					  items=args.items, turn_ms=args.turn_ms, seed=args.seed, debug=args.debug, logger=logger)
	logger(f"{args.a} (a) vs {args.b} (b): a={tally['a']} b={tally['b']} draw={tally['draw']}")
	if log_f:
		log_f.close()


if __name__ == '__main__':
	main()
