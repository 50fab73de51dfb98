"""Pending-key accumulation and repeat-count parsing."""

from __future__ import annotations

from typing import Iterator, List, Sequence

PREFIX_TOKENS = ("g", "d")


def key_seq_to_count(tokens: Sequence[str]) -> int:
    """Decimal value of an all-digit sequence; 0 if any token is not a digit.

    0 means "no count given" and consumers default it to 1.
    """

    count = 0
    for token in tokens:
        if not (token.isdecimal() and len(token) == 1):
            return 0
        count = count * 10 + int(token)
    return count


def suffix_num_allowed(tokens: Sequence[str]) -> bool:
    """A digit may follow an empty sequence or one that already leads with a digit."""

    if not tokens:
        return True
    return tokens[0][:1].isdecimal()


class PendingKeySequence:
    """Ordered tokens of a command still being composed.

    Tokens are single decimal digits or one of the prefix letters in
    ``PREFIX_TOKENS``; digits never follow a letter prefix.
    """

    def __init__(self) -> None:
        self._tokens: List[str] = []

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __bool__(self) -> bool:
        return bool(self._tokens)

    def __repr__(self) -> str:
        return f"PendingKeySequence({self._tokens!r})"

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(self._tokens)

    @property
    def count(self) -> int:
        return key_seq_to_count(self._tokens)

    def repeat(self) -> int:
        return max(self.count, 1)

    def digit_allowed(self) -> bool:
        return suffix_num_allowed(self._tokens)

    def is_exactly(self, token: str) -> bool:
        return self._tokens == [token]

    def push_digit(self, digit: str) -> None:
        if len(digit) != 1 or not digit.isdecimal():
            raise ValueError(f"not a digit: {digit!r}")
        if not self.digit_allowed():
            raise ValueError(f"digit {digit!r} cannot follow {self._tokens[0]!r}")
        self._tokens.append(digit)

    def push_prefix(self, token: str) -> None:
        if token not in PREFIX_TOKENS:
            raise ValueError(f"unknown command prefix {token!r}")
        self._tokens.append(token)

    def clear(self) -> None:
        self._tokens.clear()


__all__ = [
    "PendingKeySequence",
    "PREFIX_TOKENS",
    "key_seq_to_count",
    "suffix_num_allowed",
]
