"""brdoc: CPF and CNPJ validation."""

from .errors import DigitMismatchError, FormatError, ValidationError
from .validators import (
    DocumentKind,
    check,
    clean,
    compute_check_digit,
    format_cnpj,
    format_cpf,
    is_cnpj,
    is_cpf,
    is_well_formed,
)

__version__ = "0.1.0"

__all__ = [
    "DocumentKind",
    "ValidationError",
    "FormatError",
    "DigitMismatchError",
    "check",
    "clean",
    "compute_check_digit",
    "format_cnpj",
    "format_cpf",
    "is_cnpj",
    "is_cpf",
    "is_well_formed",
]
