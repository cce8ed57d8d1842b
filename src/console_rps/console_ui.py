import os
from typing import Dict, Optional

from colorama import Fore, Style, just_fix_windows_console

from console_rps.game_logic import Move, Result, Vocabulary
from console_rps.results import Results, RoundOutcome

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S"


# Theme helper
class Theme:
    def __init__(self, d: Optional[Dict[str, str]] = None, enabled: bool = True):
        d = d or {}
        self.enabled = enabled
        self.player   = self._fore(d.get("player",   "cyan"))
        self.opponent = self._fore(d.get("opponent", "yellow"))
        self.win      = self._fore(d.get("win",      "green"))
        self.lose     = self._fore(d.get("lose",     "red"))
        self.tie      = self._fore(d.get("tie",      "blue"))
        self.accent   = self._fore(d.get("accent",   "magenta"))
        if enabled:
            just_fix_windows_console()

    def _fore(self, name: str) -> str:
        if not self.enabled:
            return ""
        # "cyan" -> Fore.CYAN, "light_cyan" -> Fore.LIGHTCYAN_EX
        key = name.strip().upper()
        if key.startswith("LIGHT_"):
            key = "LIGHT" + key[len("LIGHT_"):] + "_EX"
        return getattr(Fore, key, "")

    def paint(self, text: str, color: str) -> str:
        if not self.enabled or not color:
            return text
        return f"{color}{text}{Style.RESET_ALL}"

    def for_result(self, result: Result) -> str:
        return {Result.WON: self.win, Result.LOST: self.lose}.get(result, self.tie)


PLAIN = Theme(enabled=False)


def clear_screen():
    os.system("cls" if os.name == "nt" else "clear")


def render_start_screen(opponent_name: str, vocabulary: Vocabulary, wins_limit: int, theme: Theme = PLAIN) -> str:
    title = "-".join(name.capitalize() for name in vocabulary.options.values())
    return "\n".join([
        "",
        theme.paint(f"Welcome to {title} game!", theme.accent),
        "",
        f"You are playing against {theme.paint(opponent_name, theme.opponent)}",
        f"First to win {wins_limit} games takes the match.",
        "",
        "Let's start...",
    ])


def render_choice(label: str, move: Move, color: str = "", theme: Theme = PLAIN) -> str:
    return f"{label + ' chose:':<17}" + theme.paint(move.name.upper(), color)


def render_round_result(outcome: RoundOutcome, theme: Theme = PLAIN) -> str:
    if outcome.result == Result.WON:
        head = theme.paint("Congratulations! You WON!", theme.win)
        return f"{head}\n{outcome.player.explain(outcome.opponent)}"
    if outcome.result == Result.LOST:
        head = theme.paint("Sorry, you LOST...", theme.lose)
        return f"{head}\n{outcome.opponent.explain(outcome.player)}"
    return theme.paint("It's a tie.", theme.tie)


def render_stats(results: Results, theme: Theme = PLAIN) -> str:
    stats = results.stats()
    perc = results.percentages()
    lines = ["Stats:"]
    for result in Result:
        key = result.value
        line = f"{key.capitalize()}: {stats[key]} game(s) [{perc[key]}%]"
        lines.append(theme.paint(line, theme.for_result(result)))
    return "\n".join(lines)


def render_log(results: Results, opponent_name: str = "Computer", theme: Theme = PLAIN) -> str:
    if not len(results):
        return "(no rounds played)"
    lines = []
    for o in results.log:
        result = theme.paint(o.result.value.upper(), theme.for_result(o.result))
        lines.append(
            f"{o.timestamp.strftime(TIMESTAMP_FMT)} - {result}: "
            f"{o.player.name.capitalize()} vs. {o.opponent.name.capitalize()} ({opponent_name})"
        )
    return "\n".join(lines)


def render_match_result(winner: Result, opponent_name: str, wins_limit: int,
                        theme: Theme = PLAIN, limit_reached: bool = True) -> str:
    if winner == Result.WON:
        head = theme.paint("Congratulations! You WON!", theme.win)
        return head + (f"\nYou were first to win {wins_limit} games." if limit_reached else "")
    if winner == Result.LOST:
        head = theme.paint("Oops, you LOST!", theme.lose)
        return head + (f"\n{opponent_name} was first to win {wins_limit} games." if limit_reached else "")
    return theme.paint("A tie? How could this happen?", theme.tie)
