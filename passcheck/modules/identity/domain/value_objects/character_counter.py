"""
Character Counter Value Object

Composition statistics for a candidate password, computed once per
validation and consumed by the syntax rule checkers.
"""

from dataclasses import dataclass
from itertools import groupby

from .base import ValueObject


def _is_special(char: str) -> bool:
    return not char.isalnum()


def _is_other_letter(char: str) -> bool:
    """Alphabetic characters without case, such as CJK ideographs."""
    return char.isalpha() and not char.isupper() and not char.islower()


def longest_consecutive_run(password: str) -> int:
    """
    Length of the longest run of code points stepping by exactly +1 or -1.

    A run keeps one direction; "abcba" yields 3.
    """
    if not password:
        return 0

    longest = current = 1
    direction = 0
    for previous, char in zip(password, password[1:]):
        step = ord(char) - ord(previous)
        if step in (1, -1):
            if step == direction:
                current += 1
            else:
                current = 2
                direction = step
        else:
            current = 1
            direction = 0
        longest = max(longest, current)
    return longest


@dataclass(frozen=True)
class CharacterCounter(ValueObject):
    """
    Password composition statistics.

    Repeat statistics compare characters case-insensitively. The overall
    repeat count is the total length of every run of two or more identical
    adjacent characters, so "aabbb" counts 5 and "aXaa" counts 2.
    """

    length: int = 0
    numeric: int = 0
    alpha: int = 0
    non_alpha: int = 0
    upper: int = 0
    lower: int = 0
    special: int = 0
    other_letter: int = 0
    unique: int = 0
    first_is_numeric: bool = False
    last_is_numeric: bool = False
    first_is_special: bool = False
    last_is_special: bool = False
    sequential_repeat: int = 0
    overall_repeat: int = 0
    consecutive_run: int = 0

    @classmethod
    def from_password(cls, password: str) -> "CharacterCounter":
        """Count a password in a single pass over its characters."""
        password = password or ""

        numeric = alpha = upper = lower = special = other_letter = 0
        for char in password:
            if char.isdigit():
                numeric += 1
            if char.isalpha():
                alpha += 1
            if char.isupper():
                upper += 1
            if char.islower():
                lower += 1
            if _is_special(char):
                special += 1
            if _is_other_letter(char):
                other_letter += 1

        run_lengths = [len(list(group)) for _, group in groupby(password.lower())]

        return cls(
            length=len(password),
            numeric=numeric,
            alpha=alpha,
            non_alpha=len(password) - alpha,
            upper=upper,
            lower=lower,
            special=special,
            other_letter=other_letter,
            unique=len(set(password)),
            first_is_numeric=bool(password) and password[0].isdigit(),
            last_is_numeric=bool(password) and password[-1].isdigit(),
            first_is_special=bool(password) and _is_special(password[0]),
            last_is_special=bool(password) and _is_special(password[-1]),
            sequential_repeat=max(run_lengths, default=0),
            overall_repeat=sum(length for length in run_lengths if length >= 2),
            consecutive_run=longest_consecutive_run(password),
        )

    @property
    def character_classes(self) -> int:
        """Number of upper, lower, numeric and special classes present."""
        return sum(1 for count in (self.upper, self.lower, self.numeric, self.special) if count)


def count_characters(password: str) -> CharacterCounter:
    """Compute composition statistics for a password."""
    return CharacterCounter.from_password(password)
