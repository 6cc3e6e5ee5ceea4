"""
CPF / CNPJ check-digit validation and the password policy applied on registration.

All functions are pure. Validators never raise: malformed input is simply
reported as invalid.
"""

import re
from typing import Any, Dict, Sequence

_RE_NON_DIGITS = re.compile(r"[^0-9]+")

CPF_LENGTH = 11
CNPJ_LENGTH = 14

CNPJ_WEIGHTS_FIRST = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
CNPJ_WEIGHTS_SECOND = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)


def only_digits(value: Any) -> str:
    if value is None:
        return ""
    return _RE_NON_DIGITS.sub("", str(value))


def _check_digit(base: str, weights: Sequence[int]) -> int:
    total = sum(int(d) * w for d, w in zip(base, weights))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def _all_same(digits: str) -> bool:
    return len(set(digits)) == 1


def cpf_check_digits(base9: str) -> str:
    """Both CPF check digits for the first nine digits."""
    first = _check_digit(base9, range(10, 1, -1))
    second = _check_digit(base9 + str(first), range(11, 1, -1))
    return f"{first}{second}"


def cnpj_check_digits(base12: str) -> str:
    """Both CNPJ check digits for the first twelve digits."""
    first = _check_digit(base12, CNPJ_WEIGHTS_FIRST)
    second = _check_digit(base12 + str(first), CNPJ_WEIGHTS_SECOND)
    return f"{first}{second}"


def validate_cpf(value: Any) -> bool:
    cpf = only_digits(value)
    if len(cpf) != CPF_LENGTH or _all_same(cpf):
        return False
    return cpf[9:] == cpf_check_digits(cpf[:9])


def validate_cnpj(value: Any) -> bool:
    cnpj = only_digits(value)
    if len(cnpj) != CNPJ_LENGTH or _all_same(cnpj):
        return False
    return cnpj[12:] == cnpj_check_digits(cnpj[:12])


def validate_cpf_or_cnpj(value: Any) -> bool:
    """Dispatch on the normalized digit count: 11 -> CPF, 14 -> CNPJ, else invalid."""
    digits = only_digits(value)
    if len(digits) == CPF_LENGTH:
        return validate_cpf(digits)
    if len(digits) == CNPJ_LENGTH:
        return validate_cnpj(digits)
    return False


def password_checks(password: Any) -> Dict[str, bool]:
    pw = str(password or "")
    return {
        "len": len(pw) >= 8,
        "upper": bool(re.search(r"[A-Z]", pw)),
        "lower": bool(re.search(r"[a-z]", pw)),
        "digit": bool(re.search(r"[0-9]", pw)),
        "special": bool(re.search(r"[^A-Za-z0-9]", pw)),
    }


_PASSWORD_RULE_LABELS = (
    ("len", "mínimo 8 caracteres"),
    ("upper", "1 maiúscula"),
    ("lower", "1 minúscula"),
    ("digit", "1 número"),
    ("special", "1 caractere especial"),
)


def password_error_message(checks: Dict[str, bool]) -> str:
    """Empty string when every rule passes."""
    missing = [label for key, label in _PASSWORD_RULE_LABELS if not checks.get(key)]
    if not missing:
        return ""
    return f"A senha precisa ter: {', '.join(missing)}."
