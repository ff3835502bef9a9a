"""Play against the engine in a terminal."""

import argparse
import logging

from tactician import configure_logging
from tactician.config import CONFIG
from tactician.main import Engine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play chess against the engine.")
    parser.add_argument("--depth", type=int, default=CONFIG.search.depth, help="search depth in plies")
    parser.add_argument("--minimax", action="store_true", help="plain minimax instead of alpha-beta")
    parser.add_argument("--quiescence", action="store_true", help="extend leaves with a capture search")
    parser.add_argument("--no-ordering", action="store_true", help="disable move ordering")
    parser.add_argument("--black", action="store_true", help="play the black pieces")
    parser.add_argument("--log-level", default=None, help="logging level (default from config)")
    return parser


def engine_from_args(args: argparse.Namespace) -> Engine:
    return Engine(
        depth=args.depth,
        use_alpha_beta=not args.minimax,
        use_quiescence=args.quiescence,
        use_move_ordering=not args.no_ordering,
        engine_is_white=args.black,
    )


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    engine = engine_from_args(args)
    human_is_white = not engine.is_white

    while not engine.is_game_over():
        engine.print_board()
        print("----------------------------")

        if engine.board.turn == human_is_white:
            user_move = input("Enter your move (uci format, e2e4): ").strip()
            if user_move in ("quit", "exit"):
                break
            if not engine.make_move(user_move):
                print("Illegal move, try again.")
                continue
            engine.log_move("Player")
        else:
            move = engine.computer_move()
            print(f"Engine plays: {move} | Eval: {engine.evaluator.current_eval()}")
            engine.log_move("Computer")

    print("Game Over")
    print(f"Result: {engine.result()}")
    print(engine.board.to_pgn())


if __name__ == "__main__":
    main()
