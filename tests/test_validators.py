import pytest
from brdoc import (
    DigitMismatchError,
    DocumentKind,
    FormatError,
    check,
    clean,
    compute_check_digit,
    is_cnpj,
    is_cpf,
    is_well_formed,
)

VALID_CPF = "11144477735"
VALID_CNPJ = "11444777000161"


# ---- clean ----

def test_clean_strips_punctuation():
    assert clean("111.444.777-35") == VALID_CPF
    assert clean("11.444.777/0001-61") == VALID_CNPJ

def test_clean_without_digits():
    assert clean("") == ""
    assert clean("abc./-") == ""
    assert clean(None) == ""

def test_clean_drops_non_ascii_digits():
    assert clean("1٣ 2") == "12"


# ---- is_well_formed ----

@pytest.mark.parametrize("digit", "0123456789")
def test_repeated_digits_rejected(digit):
    assert not is_well_formed(digit * 11, DocumentKind.cpf)
    assert not is_well_formed(digit * 14, DocumentKind.cnpj)

def test_length_must_match_kind():
    assert is_well_formed(VALID_CPF, DocumentKind.cpf)
    assert not is_well_formed(VALID_CPF, DocumentKind.cnpj)
    assert is_well_formed(VALID_CNPJ, DocumentKind.cnpj)
    assert not is_well_formed(VALID_CNPJ, DocumentKind.cpf)
    assert not is_well_formed("", DocumentKind.cpf)

def test_repeated_digits_of_other_length_only_fail_on_length():
    # 12 repeated digits are not denylisted, but are the wrong length anyway
    assert not is_well_formed("1" * 12, DocumentKind.cpf)


# ---- compute_check_digit ----

def test_check_digit_worked_example():
    # 3*10 + 4*9 + 2*8 + 6*7 + 1*6 + 8*5 + 7*4 + 1*3 + 0*2 = 201; 201 % 11 = 3
    assert compute_check_digit("342618710", 10) == 8

def test_check_digits_cpf():
    assert compute_check_digit("111444777", 10) == 3
    assert compute_check_digit("1114447773", 11) == 5

def test_check_digits_cnpj_weights_wrap_to_nine():
    assert compute_check_digit("114447770001", 5) == 6
    assert compute_check_digit("1144477700016", 6) == 1

def test_low_remainder_gives_zero():
    assert compute_check_digit("0", 2) == 0
    assert compute_check_digit("6", 2) == 0  # 12 % 11 == 1

def test_check_digit_deterministic():
    assert compute_check_digit("987654321", 10) == compute_check_digit("987654321", 10)


# ---- is_cpf / is_cnpj ----

@pytest.mark.parametrize("doc", [VALID_CPF, "111.444.777-35", " 111 444 777 35 ", "529.982.247-25", "12345678909"])
def test_valid_cpf(doc):
    assert is_cpf(doc) == (True, None)

@pytest.mark.parametrize("doc", [VALID_CNPJ, "11.444.777/0001-61"])
def test_valid_cnpj(doc):
    assert is_cnpj(doc) == (True, None)

@pytest.mark.parametrize("doc", ["", ".", "-/.", "...---///", None])
def test_empty_or_separators_only(doc):
    for fn in (is_cpf, is_cnpj):
        ok, err = fn(doc)
        assert ok is False
        assert isinstance(err, FormatError)

@pytest.mark.parametrize("digit", "0123456789")
def test_repeated_digit_documents(digit):
    ok, err = is_cpf(digit * 11)
    assert not ok and isinstance(err, FormatError)
    ok, err = is_cnpj(digit * 14)
    assert not ok and isinstance(err, FormatError)

def test_wrong_kind_is_format_error():
    ok, err = is_cpf(VALID_CNPJ)
    assert not ok and isinstance(err, FormatError)
    ok, err = is_cnpj(VALID_CPF)
    assert not ok and isinstance(err, FormatError)

def test_second_digit_mismatch():
    ok, err = is_cpf("11144477736")
    assert ok is False
    assert isinstance(err, DigitMismatchError)
    assert (err.position, err.expected, err.found) == (2, 5, 6)
    assert str(err) == "Invalid digit"

def test_first_digit_mismatch():
    ok, err = is_cnpj("11.444.777/0001-71")
    assert isinstance(err, DigitMismatchError)
    assert (err.position, err.expected, err.found) == (1, 6, 7)

def test_separators_do_not_change_result():
    for raw in ["111.444.777-35", "111.444.777-36", "11.444.777/0001-61", "11.444.777/0001-62"]:
        assert is_cpf(raw)[0] == is_cpf(clean(raw))[0]
        assert is_cnpj(raw)[0] == is_cnpj(clean(raw))[0]


# ---- strict mode ----

def test_strict_accepts_canonical_forms():
    assert is_cpf("111.444.777-35", strict=True) == (True, None)
    assert is_cpf(VALID_CPF, strict=True) == (True, None)
    assert is_cnpj("11.444.777/0001-61", strict=True) == (True, None)

@pytest.mark.parametrize("doc", ["111-444-777.35", " 111.444.777-35", "111.444.777-35\n"])
def test_strict_rejects_misplaced_punctuation(doc):
    ok, err = is_cpf(doc, strict=True)
    assert not ok and isinstance(err, FormatError)
    # lenient mode only looks at the digits
    assert is_cpf(doc) == (True, None)


# ---- check ----

def test_check_raises():
    check(VALID_CPF, DocumentKind.cpf)
    check(VALID_CNPJ, "cnpj")
    with pytest.raises(FormatError, match="Invalid format"):
        check("123", DocumentKind.cpf)
    with pytest.raises(DigitMismatchError):
        check("11144477736", DocumentKind.cpf)

def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        check("00000000000", DocumentKind.cpf)


# ---- branch 0000 ----

def test_cnpj_branch_zero_rejected_despite_valid_checksum():
    assert compute_check_digit("114447770000", 5) == 8
    assert compute_check_digit("1144477700008", 6) == 0
    ok, err = is_cnpj("11444777000080")
    assert ok is False
    assert isinstance(err, FormatError)
    assert not is_well_formed("11444777000080", DocumentKind.cnpj)

def test_zero_branch_rule_ignores_cpf_length():
    # positions 8-11 do not exist in an 11-digit CPF
    assert is_well_formed("12345678909", DocumentKind.cpf)
