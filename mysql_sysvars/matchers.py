"""Declarative token shapes recognised at the end of a detail table row.

A shape is read backwards from the ``</tr>`` that closes the row: step 0
checks the newest token in the history window, step 1 the one before it,
and so on. The detail rows look like::

    <tr><td scope="row"><span class="bold"><strong>Default</strong></span></td>
        <td colspan="2"><code class="literal">OFF</code></td></tr>

so the label ("Default") sits several tokens before the value ("OFF"), and
the row is only unambiguous once it has been closed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .history import TokenHistory
from .tokens import Token, TokenKind

__all__ = ["Step", "Matcher", "MATCHERS", "match_row"]


@dataclass(frozen=True, slots=True)
class Step:
    """Constraint on a single token of a shape.

    ``kind`` None accepts any token. For tag steps ``value`` is the tag
    name; for text steps it is the expected label, compared after trimming
    surrounding whitespace. A capturing step yields the token payload.
    """

    kind: Optional[TokenKind] = None
    value: Optional[str] = None
    capture: bool = False

    def accepts(self, token: Token) -> bool:
        if self.kind is None:
            return True
        if token.kind is not self.kind:
            return False
        if self.value is None:
            return True
        if self.kind is TokenKind.TEXT:
            return token.name.strip() == self.value
        return token.name == self.value


def start(tag: str) -> Step:
    return Step(TokenKind.START_TAG, tag)


def end(tag: str) -> Step:
    return Step(TokenKind.END_TAG, tag)


def label(value: str) -> Step:
    return Step(TokenKind.TEXT, value)


ANY = Step()
VALUE = Step(TokenKind.TEXT, capture=True)


@dataclass(frozen=True, slots=True)
class Matcher:
    field: str
    steps: Tuple[Step, ...]

    def match(self, history: TokenHistory) -> Optional[str]:
        """Return the captured payload when every step accepts its token."""
        if len(history) < len(self.steps):
            return None
        captured: Optional[str] = None
        for offset, step in enumerate(self.steps):
            token = history.at(offset)
            if token is None or not step.accepts(token):
                return None
            if step.capture:
                captured = token.name
        return captured


def _label_row(field: str, text: str, value_steps: Sequence[Step]) -> Matcher:
    """Shape of ``<tr><td><span><strong>LABEL</strong></span></td><td>...VALUE...</td></tr>``."""
    return Matcher(
        field=field,
        steps=(
            end("tr"),
            end("td"),
            *value_steps,
            start("td"),
            end("td"),
            end("span"),
            end("strong"),
            label(text),
            start("strong"),
            start("span"),
            start("td"),
            start("tr"),
        ),
    )


# <td><span class="bold"><strong>Type</strong></span></td><td colspan="2"><code class="literal">integer</code></td></tr>
# The type row opens with the "Permitted Values" cell, so only the label cell is checked.
TYPE_MATCHER = Matcher(
    field="data_type",
    steps=(
        end("tr"),
        end("td"),
        end("code"),
        VALUE,
        start("code"),
        start("td"),
        end("td"),
        end("span"),
        end("strong"),
        label("Type"),
    ),
)

# <tr><td scope="row"><span class="bold"><strong>Command-Line Format</strong></span></td><td colspan="3"><code class="literal">--flush</code></td></tr>
COMMAND_LINE_MATCHER = Matcher(
    field="command_line",
    steps=(
        end("tr"),
        end("td"),
        end("code"),
        VALUE,
        start("code"),
        start("td"),
        end("td"),
        ANY,
        ANY,
        label("Command-Line Format"),
        start("strong"),
        start("span"),
        start("td"),
        start("tr"),
    ),
)

# <tr><td scope="row"><span class="bold"><strong>Variable Scope</strong></span></td><td colspan="2">Global</td></tr>
SCOPE_MATCHER = _label_row("scope", "Variable Scope", (VALUE,))

# <tr><td scope="row"><span class="bold"><strong>Default</strong></span></td><td colspan="2"><code class="literal">OFF</code></td></tr>
DEFAULT_MATCHER = _label_row("default_value", "Default", (end("code"), VALUE, start("code")))

# <tr><td scope="row"><span class="bold"><strong>Dynamic Variable</strong></span></td><td colspan="2">Yes</td></tr>
DYNAMIC_MATCHER = _label_row("dynamic", "Dynamic Variable", (VALUE,))

MATCHERS: Tuple[Matcher, ...] = (
    TYPE_MATCHER,
    COMMAND_LINE_MATCHER,
    SCOPE_MATCHER,
    DEFAULT_MATCHER,
    DYNAMIC_MATCHER,
)


def match_row(
    history: TokenHistory, matchers: Sequence[Matcher] = MATCHERS
) -> Optional[Tuple[str, str]]:
    """Run ``matchers`` in priority order and return the first (field, value) hit."""
    for matcher in matchers:
        value = matcher.match(history)
        if value is not None:
            return matcher.field, value
    return None
