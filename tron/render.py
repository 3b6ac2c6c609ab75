from __future__ import annotations
import cv2, os
import numpy as np
from .game import Board, EMPTY, POWER_UP, WALL, OWNED, OCCUPIED
from .utils import Position

CELL_SIZE = 48
# BGR
PLAYER_COLOR = [(255, 0, 0), (0, 0, 255)]
TRAIL_COLOR = [(255, 190, 190), (190, 190, 255)]
WALL_COLOR = (90, 90, 90)
POWER_UP_COLOR = (0, 160, 0)


def draw_board(board: Board, cell_size: int = CELL_SIZE) -> np.ndarray:
	h_px = board.height * cell_size
	w_px = board.width * cell_size
	img = np.ones((h_px + 4, w_px + 4, 3), dtype=np.uint8) * 255

	for r in range(board.height):
		for c in range(board.width):
			st = board.state_at(Position(r, c))
			x1, y1 = c * cell_size, r * cell_size
			x2, y2 = x1 + cell_size, y1 + cell_size
			if st.kind == WALL:
				cv2.rectangle(img, (x1, y1), (x2, y2), WALL_COLOR, -1)
			elif st.kind == OWNED:
				cv2.rectangle(img, (x1, y1), (x2, y2), TRAIL_COLOR[st.player_id % 2], -1)
			elif st.kind == OCCUPIED:
				cx, cy = x1 + cell_size // 2, y1 + cell_size // 2
				cv2.circle(img, (cx, cy), cell_size // 2 - 6, PLAYER_COLOR[st.player_id % 2], -1)
			elif st.kind == POWER_UP:
				cv2.putText(img, st.symbol, (x1 + cell_size // 4, y2 - cell_size // 4),
							cv2.FONT_HERSHEY_SIMPLEX, cell_size / 40.0, POWER_UP_COLOR, 2)
			elif st.kind != EMPTY:
				raise ValueError(f"unknown cell kind {st.kind}")

	for i in range(board.height + 1):
		y = i * cell_size
		cv2.line(img, (0, y), (w_px, y), (0, 0, 0), 2)
	for i in range(board.width + 1):
		x = i * cell_size
		cv2.line(img, (x, 0), (x, h_px), (0, 0, 0), 2)
	return img


def print_board(board: Board, timestamp: str, frame: int, silence: bool = True):
	img = draw_board(board)
	if silence:
		save_dir = os.path.join('logs/', timestamp)
		os.makedirs(save_dir, exist_ok=True)
		save_path = os.path.join(save_dir, 'board' + str(frame) + '.png')
		cv2.imwrite(save_path, img)
	else:
		cv2.imshow("Tron Board", img)
		cv2.waitKey(0)
		cv2.destroyAllWindows()
