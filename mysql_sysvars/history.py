"""Bounded look-back buffer over the most recent tokens."""

from __future__ import annotations

from collections import deque
from typing import Iterator, Optional

from .tokens import Token

__all__ = ["TOKEN_HISTORY_SIZE", "TokenHistory"]

TOKEN_HISTORY_SIZE = 15


class TokenHistory:
    """Most-recent-first window of the last ``size`` tokens.

    Offset 0 is the token pushed last; pushing into a full window drops the
    oldest token.
    """

    def __init__(self, size: int = TOKEN_HISTORY_SIZE) -> None:
        if size <= 0:
            raise ValueError("history size must be positive")
        self.size = size
        self._tokens: deque[Token] = deque(maxlen=size)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def push(self, token: Token) -> None:
        self._tokens.appendleft(token)

    def at(self, offset: int) -> Optional[Token]:
        if offset < 0 or offset >= len(self._tokens):
            return None
        return self._tokens[offset]

    def describe(self) -> list[str]:
        return [f"{index} {token.describe()}" for index, token in enumerate(self._tokens)]
