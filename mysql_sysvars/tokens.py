"""Markup tokenizer producing a flat stream of typed tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import Comment, Doctype, NavigableString, PreformattedString, Tag

__all__ = ["Token", "TokenKind", "iter_tokens", "start_tag", "end_tag", "text"]


class TokenKind(Enum):
    START_TAG = "start_tag"
    END_TAG = "end_tag"
    TEXT = "text"
    COMMENT = "comment"
    DOCTYPE = "doctype"
    SELF_CLOSING = "self_closing"


@dataclass(frozen=True, slots=True)
class Token:
    """One classified unit of markup.

    ``name`` is the tag name for tag tokens and the raw payload for text,
    comment and doctype tokens. ``attrs`` keeps the source attribute order.
    """

    kind: TokenKind
    name: str
    attrs: Tuple[Tuple[str, str], ...] = ()

    def is_start(self, tag: str) -> bool:
        return self.kind is TokenKind.START_TAG and self.name == tag

    def is_end(self, tag: str) -> bool:
        return self.kind is TokenKind.END_TAG and self.name == tag

    def first_attr(self) -> Optional[Tuple[str, str]]:
        return self.attrs[0] if self.attrs else None

    def describe(self) -> str:
        if self.kind is TokenKind.TEXT:
            return f"text {self.name!r}"
        if self.attrs:
            rendered = " ".join(f'{key}="{value}"' for key, value in self.attrs)
            return f"{self.kind.value} {self.name} {rendered}"
        return f"{self.kind.value} {self.name}"


def start_tag(name: str, *attrs: Tuple[str, str]) -> Token:
    return Token(TokenKind.START_TAG, name, tuple(attrs))


def end_tag(name: str) -> Token:
    return Token(TokenKind.END_TAG, name)


def text(payload: str) -> Token:
    return Token(TokenKind.TEXT, payload)


def iter_tokens(markup: str) -> Iterator[Token]:
    """Yield tokens for ``markup`` in document order.

    Every element produces a start and an end token, so a parsed document
    always finishes with ``</html>``. Void elements without content are
    reported as self-closing.
    """
    soup = BeautifulSoup(markup, "lxml", multi_valued_attributes=None)
    yield from _walk(soup)


def _walk(node: Tag) -> Iterator[Token]:
    for child in node.children:
        if isinstance(child, Tag):
            attrs = tuple((key, str(value)) for key, value in child.attrs.items())
            if child.is_empty_element:
                yield Token(TokenKind.SELF_CLOSING, child.name, attrs)
                continue
            yield Token(TokenKind.START_TAG, child.name, attrs)
            yield from _walk(child)
            yield Token(TokenKind.END_TAG, child.name)
        elif isinstance(child, Doctype):
            yield Token(TokenKind.DOCTYPE, str(child))
        elif isinstance(child, (Comment, PreformattedString)):
            yield Token(TokenKind.COMMENT, str(child))
        elif isinstance(child, NavigableString):
            yield Token(TokenKind.TEXT, str(child))
