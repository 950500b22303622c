"""
CPF and CNPJ validation.

Pipeline
--------
Every check runs the same three stages and stops at the first failure:

  1) clean           -> drop everything that is not an ASCII digit
  2) is_well_formed  -> reject repeated-digit numbers and wrong lengths
  3) check digits    -> recompute both mod-11 check digits and compare

CPF and CNPJ differ only in their length, the starting weight of the checksum
and their punctuated display shape; those live in `_SHAPES`, keyed by
`DocumentKind`.

All functions are pure and the module-level tables are never mutated, so the
validators are safe to call from any thread.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple
import re

from .errors import DigitMismatchError, FormatError, ValidationError


class DocumentKind(str, Enum):
    cpf = "cpf"
    cnpj = "cnpj"


@dataclass(frozen=True)
class _Shape:
    """
    Per-kind constants.

    Attributes:
        length:       Number of digits, check digits included.
        start_weight: Weight applied to the first digit of the first check digit.
        strict:       Separator-tolerant pattern the raw input must match in strict mode.
        template:     Display layout; each '#' takes one digit.
    """
    length: int
    start_weight: int
    strict: re.Pattern[str]
    template: str


_SHAPES: Dict[DocumentKind, _Shape] = {
    DocumentKind.cpf: _Shape(
        length=11,
        start_weight=10,
        strict=re.compile(r"^\d{3}\.?\d{3}\.?\d{3}-?\d{2}$", re.ASCII),
        template="###.###.###-##",
    ),
    DocumentKind.cnpj: _Shape(
        length=14,
        start_weight=5,
        strict=re.compile(r"^\d{2}\.?\d{3}\.?\d{3}/?\d{4}-?\d{2}$", re.ASCII),
        template="##.###.###/####-##",
    ),
}

# Numbers made of a single repeated digit are never issued, even though some of
# them satisfy the checksum.
_REPEATED: FrozenSet[Tuple[int, str]] = frozenset(
    (shape.length, digit) for shape in _SHAPES.values() for digit in "0123456789"
)

_NON_DIGIT = re.compile(r"[^0-9]")


# ---- Normalizer --------------------------------------------------------------------------

def clean(doc: Optional[str]) -> str:
    """
    Return only the ASCII digits of `doc`, in order.

    "111.444.777-35" -> "11144477735". Returns "" for None or digit-free input.
    """
    return _NON_DIGIT.sub("", doc or "")


# ---- Pattern filter ----------------------------------------------------------------------

def _is_repeated(cleaned: str) -> bool:
    # _REPEATED is the denylist kept as data; the length lookup alone already
    # narrows it to 11/14 digits, the string comparison does the rest.
    return (len(cleaned), cleaned[:1]) in _REPEATED and cleaned == cleaned[0] * len(cleaned)


def _is_zero_branch(cleaned: str) -> bool:
    # CNPJ branches are numbered from 0001.
    return len(cleaned) == _SHAPES[DocumentKind.cnpj].length and cleaned[8:12] == "0000"


def is_well_formed(cleaned: str, kind: DocumentKind) -> bool:
    """
    True if `cleaned` has the digit count of `kind` and is not denylisted.

    The denylist (repeated-digit numbers and CNPJs with branch 0000) is
    consulted first so that "11111111111" is rejected even though it has the
    right length for a CPF.
    """
    if _is_repeated(cleaned) or _is_zero_branch(cleaned):
        return False
    shape = _SHAPES[DocumentKind(kind)]
    return len(cleaned) == shape.length and not _NON_DIGIT.search(cleaned)


# ---- Checksum ----------------------------------------------------------------------------

def compute_check_digit(digits: str, start_weight: int) -> int:
    """
    Compute one mod-11 check digit over `digits`.

    Weights start at `start_weight` and decrease by one per digit; when they
    would fall below 2 they wrap to 9. For a CPF body:

          3    4    2    6    1    8    7    1    0
        x10   x9   x8   x7   x6   x5   x4   x3   x2
         30 + 36 + 16 + 42 +  6 + 40 + 28 +  3 +  0 = 201

    201 % 11 == 3, so the digit is 11 - 3 = 8. Remainders 0 and 1 give 0.
    """
    total = 0
    weight = start_weight
    for ch in digits:
        total += (ord(ch) - 48) * weight
        weight -= 1
        if weight < 2:
            weight = 9

    rem = total % 11
    return 0 if rem < 2 else 11 - rem


# ---- Full check --------------------------------------------------------------------------

def check(doc: Optional[str], kind: DocumentKind, strict: bool = False) -> None:
    """
    Validate `doc` as a document of `kind`, raising on failure.

    Args:
        doc:    Raw input, punctuation allowed.
        kind:   Which document to validate against.
        strict: Also require the raw input to follow the canonical punctuation
                (separators optional, but only in their usual places).

    Raises:
        FormatError: empty, wrong length, repeated digits, or (strict) bad punctuation.
        DigitMismatchError: a check digit differs from the computed one.
    """
    shape = _SHAPES[DocumentKind(kind)]

    if strict and not shape.strict.fullmatch(doc or ""):
        raise FormatError()

    digits = clean(doc)
    if not digits or not is_well_formed(digits, kind):
        raise FormatError()

    pos = len(digits) - 2
    body = digits[:pos]

    first = compute_check_digit(body, shape.start_weight)
    if first != int(digits[pos]):
        raise DigitMismatchError(1, expected=first, found=int(digits[pos]))

    second = compute_check_digit(body + str(first), shape.start_weight + 1)
    if second != int(digits[pos + 1]):
        raise DigitMismatchError(2, expected=second, found=int(digits[pos + 1]))


def _verdict(
    doc: Optional[str], kind: DocumentKind, strict: bool
) -> Tuple[bool, Optional[ValidationError]]:
    try:
        check(doc, kind, strict=strict)
    except ValidationError as e:
        return False, e
    return True, None


def is_cpf(doc: Optional[str], strict: bool = False) -> Tuple[bool, Optional[ValidationError]]:
    """Validate a CPF. Returns (True, None) or (False, error)."""
    return _verdict(doc, DocumentKind.cpf, strict)


def is_cnpj(doc: Optional[str], strict: bool = False) -> Tuple[bool, Optional[ValidationError]]:
    """Validate a CNPJ. Returns (True, None) or (False, error)."""
    return _verdict(doc, DocumentKind.cnpj, strict)


# ---- Formatting --------------------------------------------------------------------------

def _format(doc: Optional[str], kind: DocumentKind) -> str:
    shape = _SHAPES[kind]
    digits = clean(doc)
    if len(digits) != shape.length:
        raise FormatError()
    it = iter(digits)
    return "".join(next(it) if c == "#" else c for c in shape.template)


def format_cpf(doc: Optional[str]) -> str:
    """Render a CPF as 000.000.000-00. Check digits are not verified."""
    return _format(doc, DocumentKind.cpf)


def format_cnpj(doc: Optional[str]) -> str:
    """Render a CNPJ as 00.000.000/0000-00. Check digits are not verified."""
    return _format(doc, DocumentKind.cnpj)
