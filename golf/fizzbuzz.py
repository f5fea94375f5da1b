# golf/fizzbuzz.py
from __future__ import annotations

from functools import lru_cache

FIZZBUZZ_LIMIT = 100


def fizzbuzz_line(n: int) -> str:
    if n % 15 == 0:
        return "FizzBuzz"
    if n % 3 == 0:
        return "Fizz"
    if n % 5 == 0:
        return "Buzz"
    return str(n)


@lru_cache(maxsize=None)
def expected_lines(limit: int = FIZZBUZZ_LIMIT) -> tuple:
    return tuple(fizzbuzz_line(n) for n in range(1, limit + 1))


def normalize_output(output: str) -> list[str]:
    """One line per number; surrounding whitespace and blank lines ignored."""
    return [line.strip() for line in (output or "").splitlines() if line.strip()]


def is_correct_output(output: str, limit: int = FIZZBUZZ_LIMIT) -> bool:
    return tuple(normalize_output(output)) == expected_lines(limit)


def character_count(code: str) -> int:
    return len((code or "").strip())
