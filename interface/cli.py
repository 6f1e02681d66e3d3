from calmtac.config import CONFIG
from calmtac.main import Game

HELP = "Enter a cell 0-8 (row*3 + col), 'u' undo, 'r' restart, 'd N' difficulty, 'q' quit."


def run(game: Game = None):
    game = game or Game(depth=CONFIG.search.depth)
    print(HELP)

    while True:
        game.print_board()
        print("----------------------------")

        if game.board.is_game_over():
            print(game.status())
            command = input("'r' to play again, 'q' to quit: ").strip().lower()
            if command == "r":
                game.restart()
                continue
            break

        if game.player_turn:
            command = input(f"[depth {game.difficulty}] Your move: ").strip().lower()
            if command == "q":
                break
            if command == "u":
                if not game.take_back():
                    print("Nothing to undo.")
                continue
            if command == "r":
                game.restart()
                continue
            if command.startswith("d"):
                try:
                    game.set_difficulty(int(command[1:]))
                    print(f"Difficulty set to {game.difficulty}")
                except ValueError:
                    print(HELP)
                continue
            try:
                index = int(command)
            except ValueError:
                print(HELP)
                continue
            if not game.human_move(index):
                print("Illegal move, try again.")
                continue
            print(f"You played:   {index}")
        else:
            move = game.engine_move()
            print(f"Engine plays: {move}")

    print("Game Over")
    print(f"Result: {game.status()}")


if __name__ == "__main__":
    run()
