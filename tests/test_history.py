import pytest

from mysql_sysvars.history import TOKEN_HISTORY_SIZE, TokenHistory
from mysql_sysvars.tokens import text


def test_history_keeps_most_recent_first():
    history = TokenHistory()
    history.push(text("first"))
    history.push(text("second"))

    assert len(history) == 2
    assert history.at(0).name == "second"
    assert history.at(1).name == "first"
    assert history.at(2) is None


def test_history_evicts_oldest_when_full():
    history = TokenHistory()
    for index in range(TOKEN_HISTORY_SIZE + 1):
        history.push(text(str(index)))

    assert TOKEN_HISTORY_SIZE == 15
    assert len(history) == TOKEN_HISTORY_SIZE
    assert history.at(0).name == str(TOKEN_HISTORY_SIZE)
    assert history.at(TOKEN_HISTORY_SIZE - 1).name == "1"
    assert history.at(TOKEN_HISTORY_SIZE) is None


def test_history_rejects_non_positive_size():
    with pytest.raises(ValueError):
        TokenHistory(0)
