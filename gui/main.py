import pygame
import sys, os

# To ensure we can import from the calmtac package
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from calmtac.config import CONFIG
from calmtac.core.board import PLAYER_A, PLAYER_B
from calmtac.main import Game
from calmtac.worker import SearchWorker

# Board
CELL_SIZE = CONFIG.ui.cell_size
MARGIN = CELL_SIZE // 4
BOARD_SIZE = 3 * CELL_SIZE
STATUS_HEIGHT = 56
WIDTH = BOARD_SIZE + 2 * MARGIN
HEIGHT = BOARD_SIZE + 2 * MARGIN + STATUS_HEIGHT

# Themes: background, foreground, cell, accent
THEMES = {
    "Light": ((245, 245, 245), (30, 30, 30), (200, 230, 255), (210, 220, 230)),
    "Dark": ((20, 20, 20), (220, 220, 220), (60, 60, 80), (80, 80, 100)),
    "Calm": ((247, 241, 237), (38, 50, 56), (224, 242, 241), (210, 234, 225)),
}
THEME_ORDER = ["Light", "Dark", "Calm"]

# Custom Events
ENGINE_MOVE_EVENT = pygame.USEREVENT + 1

DIGIT_KEYS = {getattr(pygame, f"K_{n}"): n for n in range(1, 10)}


def cell_under_mouse(pos):
    x, y = pos[0] - MARGIN, pos[1] - MARGIN
    if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
        return None
    return (y // CELL_SIZE) * 3 + (x // CELL_SIZE)


class GameWindow:
    def __init__(self):
        pygame.init()
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption(f"{CONFIG.ui.app_name} - Tic-Tac-Toe")
        self.font = pygame.font.SysFont(None, 32)

        self.game = Game(depth=CONFIG.search.depth)
        self.worker = SearchWorker(self.game.search)
        self.pending = None
        self.theme = CONFIG.ui.theme if CONFIG.ui.theme in THEMES else "Calm"
        self.hover = None

    # #-----------------------#
    # | Drawing               |
    # #-----------------------#

    def draw(self):
        bg, fg, cell, accent = THEMES[self.theme]
        self.screen.fill(bg)

        pygame.draw.rect(self.screen, cell, (MARGIN - 6, MARGIN - 6, BOARD_SIZE + 12, BOARD_SIZE + 12),
                         border_radius=24)
        width = max(4, BOARD_SIZE // 80)
        for i in (1, 2):
            x = MARGIN + i * CELL_SIZE
            pygame.draw.line(self.screen, fg, (x, MARGIN + 8), (x, MARGIN + BOARD_SIZE - 8), width)
            y = MARGIN + i * CELL_SIZE
            pygame.draw.line(self.screen, fg, (MARGIN + 8, y), (MARGIN + BOARD_SIZE - 8, y), width)

        for i in range(9):
            cx = MARGIN + (i % 3) * CELL_SIZE
            cy = MARGIN + (i // 3) * CELL_SIZE
            if i == self.hover and self.game.player_turn:
                pygame.draw.rect(self.screen, accent, (cx + 6, cy + 6, CELL_SIZE - 12, CELL_SIZE - 12),
                                 border_radius=12)
            value = self.game.board.get(i)
            if value == PLAYER_A:
                self.draw_x(cx, cy, fg)
            elif value == PLAYER_B:
                self.draw_o(cx, cy, fg)

        status = f"{self.game.status()}   depth {self.game.difficulty}"
        text = self.font.render(status, True, fg)
        self.screen.blit(text, (MARGIN, HEIGHT - STATUS_HEIGHT + 8))

    def draw_x(self, x, y, color):
        pad = max(18, CELL_SIZE // 8)
        width = max(6, CELL_SIZE // 20)
        pygame.draw.line(self.screen, color, (x + pad, y + pad), (x + CELL_SIZE - pad, y + CELL_SIZE - pad), width)
        pygame.draw.line(self.screen, color, (x + pad, y + CELL_SIZE - pad), (x + CELL_SIZE - pad, y + pad), width)

    def draw_o(self, x, y, color):
        pad = max(16, CELL_SIZE // 10)
        width = max(6, CELL_SIZE // 20)
        pygame.draw.ellipse(self.screen, color, (x + pad, y + pad, CELL_SIZE - 2 * pad, CELL_SIZE - 2 * pad), width)

    # #-----------------------#
    # | Engine                |
    # #-----------------------#

    def trigger_engine(self):
        if self.pending is not None and not self.pending.done():
            return
        self.pending = self.worker.submit(self.game.board)
        self.pending.add_done_callback(self.on_engine_done)

    def on_engine_done(self, future):
        # runs on the worker thread; hand the result to the event loop
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            print(f"Engine Error: {error}")
            return
        pygame.event.post(pygame.event.Event(ENGINE_MOVE_EVENT, {"move": future.result(), "future": future}))

    def handle_engine_move(self, event):
        if event.future is not self.pending:
            return  # stale result from before an undo/restart
        self.pending = None
        if self.game.play_engine_move(event.move):
            print(f"Engine plays: {event.move}")
        if self.game.board.is_game_over():
            print("Game Over:", self.game.status())

    # #-----------------------#
    # | Input                 |
    # #-----------------------#

    def handle_click(self, pos):
        index = cell_under_mouse(pos)
        if index is None:
            return
        if self.game.human_move(index):
            print(f"You played:   {index}")
            if self.game.board.is_game_over():
                print("Game Over:", self.game.status())
            else:
                self.trigger_engine()

    def handle_key(self, key):
        if key == pygame.K_u:
            self.pending = None
            if self.game.take_back():
                print("Move taken back")
        elif key == pygame.K_r:
            self.pending = None
            self.game.restart()
        elif key == pygame.K_t:
            self.theme = THEME_ORDER[(THEME_ORDER.index(self.theme) + 1) % len(THEME_ORDER)]
        elif key in DIGIT_KEYS:
            self.game.set_difficulty(DIGIT_KEYS[key])
            print(f"Difficulty: {self.game.difficulty}")

    # #----------------#
    # | Main Game Loop |
    # #----------------#

    def run(self):
        self.worker.start()
        clock = pygame.time.Clock()
        running = True
        try:
            while running:
                self.hover = cell_under_mouse(pygame.mouse.get_pos())
                self.draw()
                pygame.display.flip()
                clock.tick(60)

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.MOUSEBUTTONDOWN:
                        self.handle_click(event.pos)
                    elif event.type == pygame.KEYDOWN:
                        self.handle_key(event.key)
                    elif event.type == ENGINE_MOVE_EVENT:
                        self.handle_engine_move(event)
        finally:
            self.worker.shutdown()
            pygame.quit()


def main():
    GameWindow().run()


if __name__ == "__main__":
    main()
