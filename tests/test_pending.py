import pytest

from mdvim.modes import PendingKeySequence, key_seq_to_count, suffix_num_allowed


def make_pending(*tokens: str) -> PendingKeySequence:
    pending = PendingKeySequence()
    for token in tokens:
        if token.isdecimal():
            pending.push_digit(token)
        else:
            pending.push_prefix(token)
    return pending


@pytest.mark.parametrize(
    ("tokens", "expected"),
    [
        ((), 0),
        (("7",), 7),
        (("1", "0"), 10),
        (("2", "0", "4", "8"), 2048),
        (("0", "5"), 5),
    ],
)
def test_key_seq_to_count_accumulates_digits(tokens, expected) -> None:
    assert key_seq_to_count(tokens) == expected


@pytest.mark.parametrize("tokens", [("g",), ("1", "g"), ("d", "3"), ("12",)])
def test_key_seq_to_count_is_zero_with_non_digit(tokens) -> None:
    assert key_seq_to_count(tokens) == 0


def test_suffix_num_allowed_only_for_empty_or_digit_led() -> None:
    assert suffix_num_allowed(())
    assert suffix_num_allowed(("4",))
    assert not suffix_num_allowed(("g",))
    assert not suffix_num_allowed(("d",))


def test_pending_repeat_defaults_to_one() -> None:
    pending = PendingKeySequence()
    assert pending.count == 0
    assert pending.repeat() == 1

    pending.push_digit("3")
    assert pending.repeat() == 3


def test_push_digit_after_prefix_is_rejected() -> None:
    pending = make_pending("g")

    with pytest.raises(ValueError):
        pending.push_digit("3")

    assert pending.tokens == ("g",)


def test_push_prefix_rejects_unknown_tokens() -> None:
    pending = PendingKeySequence()
    with pytest.raises(ValueError):
        pending.push_prefix("q")
    assert not pending


def test_clear_and_is_exactly() -> None:
    pending = make_pending("d")
    assert pending.is_exactly("d")
    assert not pending.is_exactly("g")

    pending.clear()
    assert len(pending) == 0
    assert list(pending) == []
