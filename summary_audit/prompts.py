"""Prompt providers used to obtain user decisions."""

from __future__ import annotations

import sys
from enum import Enum
from typing import Callable, List, Optional, Protocol, Sequence, TextIO, TypeVar

T = TypeVar("T")


class PromptProvider(Protocol):
    """Interface the reconciliation flow uses to ask the user."""

    def select_one(self, message: str, choices: Sequence[T]) -> T:
        ...

    def select_many(self, message: str, choices: Sequence[T]) -> List[T]:
        ...


def choice_label(choice: object) -> str:
    if isinstance(choice, Enum):
        return str(choice.value)
    label = getattr(choice, "label", None)
    if isinstance(label, str):
        return label
    return str(choice)


class ConsolePrompt:
    """Numbered-menu prompts on a text console.

    ``select_one`` repeats the question until a valid number is entered.
    ``select_many`` accepts comma or space separated numbers, ``all``, or an
    empty answer for no selection. End of input raises ``EOFError`` so the
    caller can abort the run.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output: Optional[TextIO] = None,
        label: Callable[[object], str] = choice_label,
    ) -> None:
        self._input = input_fn
        self._output = output
        self._label = label

    def select_one(self, message: str, choices: Sequence[T]) -> T:
        if not choices:
            raise ValueError("select_one requires at least one choice")
        self._render(message, choices)
        while True:
            answer = self._input("Choice: ").strip()
            indexes = _parse_indexes(answer, len(choices))
            if indexes is not None and len(indexes) == 1:
                return choices[indexes[0]]
            self._write(f"Please enter a number between 1 and {len(choices)}.")

    def select_many(self, message: str, choices: Sequence[T]) -> List[T]:
        if not choices:
            return []
        self._render(message, choices)
        while True:
            answer = self._input("Choices (e.g. 1,2 or 'all'): ").strip()
            if not answer:
                return []
            if answer.lower() == "all":
                return list(choices)
            indexes = _parse_indexes(answer, len(choices))
            if indexes is not None:
                return [choices[index] for index in indexes]
            self._write(f"Please enter numbers between 1 and {len(choices)}.")

    def _render(self, message: str, choices: Sequence[T]) -> None:
        self._write(message)
        for position, choice in enumerate(choices, start=1):
            self._write(f"  {position}) {self._label(choice)}")

    def _write(self, line: str) -> None:
        stream = self._output or sys.stdout
        stream.write(f"{line}\n")
        stream.flush()


def _parse_indexes(answer: str, count: int) -> Optional[List[int]]:
    tokens = [token for token in answer.replace(",", " ").split() if token]
    if not tokens:
        return None
    indexes: List[int] = []
    for token in tokens:
        if not token.isdigit():
            return None
        index = int(token) - 1
        if not 0 <= index < count:
            return None
        if index not in indexes:
            indexes.append(index)
    return indexes


__all__ = ["ConsolePrompt", "PromptProvider", "choice_label"]
