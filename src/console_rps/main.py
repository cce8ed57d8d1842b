import argparse
import random
import sys
from typing import Callable, List, Optional

from loguru import logger

from console_rps.ai_policy import Opponent, make_opponent
from console_rps.config import GameConfig, load_config
from console_rps.console_ui import (
    Theme,
    clear_screen,
    render_choice,
    render_log,
    render_match_result,
    render_round_result,
    render_start_screen,
    render_stats,
)
from console_rps.game_logic import ConfigError
from console_rps.player import Player
from console_rps.session import Session


def setup_logging(cfg: GameConfig):
    logger.remove()
    logger.add(sys.stderr, level=cfg.logging.level)
    if cfg.logging.file:
        try:
            logger.add(cfg.logging.file, level="DEBUG", encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"cannot open log file {cfg.logging.file}: {e}") from e


class Game:
    """Interactive loop around a Session: prompts, announcements and replays."""

    def __init__(self, cfg: GameConfig, opponent: Optional[Opponent] = None,
                 rng: Optional[random.Random] = None,
                 input_fn: Callable[[str], str] = input,
                 output_fn: Callable[[str], None] = print):
        self.cfg = cfg
        self.vocabulary = cfg.vocabulary
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.theme = Theme(cfg.ui.theme, enabled=cfg.ui.color)
        if opponent is None:
            opponent = make_opponent(
                cfg.build_personalities(),
                use_personalities=cfg.ai.use_personalities,
                rng=rng,
                min_history=cfg.ai.counter_min_history,
            )
        self.player = Player(self.vocabulary, input_fn, output_fn)
        self.session = Session(opponent, wins_limit=cfg.game.wins_limit)

    @property
    def opponent(self) -> Opponent:
        return self.session.opponent

    def clear(self):
        if self.cfg.ui.clear_screen:
            clear_screen()

    def show_start_screen(self):
        self.clear()
        self.output_fn(render_start_screen(self.opponent.name, self.vocabulary, self.session.wins_limit, self.theme))

    def play_round(self, clear: bool = True):
        if clear:
            self.clear()
        move = self.player.make_move()
        self.output_fn(render_choice("You", move, self.theme.player, self.theme))
        outcome = self.session.play_round(move)
        self.output_fn(render_choice(self.opponent.name, outcome.opponent, self.theme.opponent, self.theme))
        self.output_fn(render_round_result(outcome, self.theme))
        self.output_fn("")
        self.output_fn(render_stats(self.session.results, self.theme))
        self.output_fn("")

    def next_round(self) -> bool:
        self.output_fn("Press Enter to continue.")
        try:
            self.input_fn("")
        except EOFError:
            return False
        return True

    def one_more_game(self) -> bool:
        self.output_fn("")
        self.output_fn("=> Do you want to play again? (y/n)")
        try:
            answer = self.input_fn("> ")
        except EOFError:
            return False
        return answer.strip().lower() == "y"

    def end_game(self):
        if not len(self.session.results):
            return
        self.output_fn(render_log(self.session.results, self.opponent.name, self.theme))
        self.output_fn("")
        winner = self.session.winner()
        self.output_fn(render_match_result(winner, self.opponent.name, self.session.wins_limit, self.theme,
                                           limit_reached=self.session.wins_limit_reached()))

    def play(self) -> int:
        self.show_start_screen()
        while True:
            # the first round of a session keeps the start screen or last summary visible
            first = True
            try:
                while not self.session.is_over:
                    self.play_round(clear=not first)
                    first = False
                    if not self.session.is_over and not self.next_round():
                        self.session.stop()
            except EOFError:
                self.session.stop()
                self.end_game()
                break
            self.end_game()
            if not self.one_more_game():
                break
            self.session.new_session()
        self.output_fn("Thanks for playing!")
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="console-rps", description="Paper-Rock-Scissors against the computer.")
    parser.add_argument("--config", default=None, help="YAML file layered over the packaged config.yaml")
    parser.add_argument("--variant", choices=["classic", "extended"], default=None,
                        help="classic (p/r/s) or extended (adds spoc(k) and (l)izard)")
    parser.add_argument("--adaptive", action="store_true",
                        help="counter the player's habits instead of using the personality odds")
    parser.add_argument("--wins", type=int, default=None, help="wins needed to take the match")
    parser.add_argument("--seed", type=int, default=None, help="seed the opponent for a reproducible game")
    parser.add_argument("--no-color", action="store_true")
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict:
    overrides: dict = {}
    if args.variant:
        overrides.setdefault("game", {})["variant"] = args.variant
    if args.wins is not None:
        overrides.setdefault("game", {})["wins_limit"] = args.wins
    if args.adaptive:
        overrides.setdefault("ai", {})["use_personalities"] = False
    if args.no_color:
        overrides.setdefault("ui", {})["color"] = False
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config, overrides_from_args(args))
        setup_logging(cfg)
    except ConfigError as e:
        print(f"console-rps: {e}", file=sys.stderr)
        return 2
    rng = random.Random(args.seed) if args.seed is not None else None
    game = Game(cfg, rng=rng)
    try:
        return game.play()
    except KeyboardInterrupt:
        print("\nBye!")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
