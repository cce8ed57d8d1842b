from __future__ import annotations

from typing import Callable

from loguru import logger

from console_rps.game_logic import InvalidMove, Move, Vocabulary

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


class Player:
    """Human side of the game; reads moves until one is valid."""

    def __init__(self, vocabulary: Vocabulary, input_fn: InputFn = input, output_fn: OutputFn = print):
        self.vocabulary = vocabulary
        self.input_fn = input_fn
        self.output_fn = output_fn

    def prompt(self) -> str:
        return self.vocabulary.prompt()

    def make_move(self) -> Move:
        """Raises EOFError when the input stream ends."""
        while True:
            self.output_fn("")
            self.output_fn(self.prompt())
            raw = self.input_fn("> ")
            try:
                move = self.vocabulary.parse(raw)
            except InvalidMove as e:
                logger.info(f"Rejected player input {raw!r}")
                self.output_fn(f"Invalid choice. {e}")
                continue
            return move
