"""Grade promotion: next-grade label computation and year-end balance rollover.

Grade labels are free text entered by office staff, e.g. "Grade 9", "پۆلی ٣" or
"پۆلی شەشەم". The numeral inside the label is incremented in the script it was written in;
labels spelled out as Kurdish ordinal words move to the next word.
Pure functions only; persistence lives in the students service.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, List, Optional, Sequence

ARABIC_INDIC_ZERO = 0x0660
EXTENDED_ARABIC_INDIC_ZERO = 0x06F0

# First to twelfth, Kurdish (Sorani).
ORDINAL_WORDS: Sequence[str] = (
    "یەکەم",
    "دووەم",
    "سێیەم",
    "چوارەم",
    "پێنجەم",
    "شەشەم",
    "حەوتەم",
    "هەشتەم",
    "نۆیەم",
    "دەیەم",
    "یازدەیەم",
    "دوازدەیەم",
)

# "دەیەم" (tenth) is a suffix of eleventh and twelfth; longer words must be tried first.
_ORDINALS_LONGEST_FIRST: List[str] = sorted(ORDINAL_WORDS, key=len, reverse=True)

GradeStrategy = Callable[[str], Optional[str]]


def _digit_block_strategy(zero: int) -> GradeStrategy:
    pattern = re.compile("[%s-%s]+" % (chr(zero), chr(zero + 9)))

    def increment(grade: str) -> Optional[str]:
        match = pattern.search(grade)
        if not match:
            return None
        digits = match.group()
        value = int("".join(str(ord(ch) - zero) for ch in digits))
        ascii_next = str(value + 1).zfill(len(digits))
        rendered = "".join(chr(zero + int(d)) for d in ascii_next)
        return grade[: match.start()] + rendered + grade[match.end():]

    return increment


_ASCII_DIGITS = re.compile(r"[0-9]+")


def _increment_ascii(grade: str) -> Optional[str]:
    match = _ASCII_DIGITS.search(grade)
    if not match:
        return None
    digits = match.group()
    rendered = str(int(digits) + 1).zfill(len(digits))
    return grade[: match.start()] + rendered + grade[match.end():]


def _increment_ordinal_word(grade: str) -> Optional[str]:
    for word in _ORDINALS_LONGEST_FIRST:
        index = grade.find(word)
        if index == -1:
            continue
        position = ORDINAL_WORDS.index(word)
        if position + 1 >= len(ORDINAL_WORDS):
            # Last grade in the table: nothing to promote to.
            return grade
        return grade[:index] + ORDINAL_WORDS[position + 1] + grade[index + len(word):]
    return None


GRADE_STRATEGIES: Sequence[GradeStrategy] = (
    _digit_block_strategy(ARABIC_INDIC_ZERO),
    _digit_block_strategy(EXTENDED_ARABIC_INDIC_ZERO),
    _increment_ascii,
    _increment_ordinal_word,
)


def next_grade(grade: Optional[str]) -> Optional[str]:
    """Return the promoted grade label, or None when the grade cannot or need not change."""
    if not grade:
        return None
    for strategy in GRADE_STRATEGIES:
        result = strategy(grade)
        if result is None:
            continue
        return result if result != grade else None
    return None


def _to_decimal(val) -> Decimal:
    if val is None or val == "":
        return Decimal("0")
    return val if isinstance(val, Decimal) else Decimal(str(val))


@dataclass(frozen=True)
class Promotion:
    """New field values for a promoted student."""

    grade: str
    tuition_fee: Decimal
    paid_amount: Decimal
    remaining_amount: Decimal
    previous_year_debt: Decimal


def promote(
    grade: Optional[str],
    tuition_fee,
    remaining_amount,
    previous_year_debt,
) -> Optional[Promotion]:
    """
    Promote one student. Returns None when the grade does not change; the student then keeps
    their balances untouched. Otherwise the unpaid remainder is added to the carried debt and
    the new period starts with full tuition owed.
    """
    new_grade = next_grade(grade)
    if new_grade is None:
        return None
    fee = _to_decimal(tuition_fee)
    total_debt = _to_decimal(remaining_amount) + _to_decimal(previous_year_debt)
    return Promotion(
        grade=new_grade,
        tuition_fee=fee,
        paid_amount=Decimal("0"),
        remaining_amount=fee,
        previous_year_debt=total_debt,
    )
