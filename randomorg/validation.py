"""Local parameter checks shared by the generators.

Every check raises ValidationError so that out-of-range input never reaches
the network.
"""

from typing import Any, List

from randomorg.errors import TypeMismatchError, ValidationError


def validate_int_range(val: int, name: str, lo: int, hi: int) -> None:
    if isinstance(val, bool) or not isinstance(val, int):
        raise ValidationError(f"{name} must be an integer, got {val!r}")
    if not (lo <= val <= hi):
        raise ValidationError(f"{name} must be in [{lo}, {hi}], got {val}")


def validate_number_range(val: float, name: str, lo: float, hi: float) -> None:
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise ValidationError(f"{name} must be a number, got {val!r}")
    if not (lo <= val <= hi):
        raise ValidationError(f"{name} must be in [{lo:g}, {hi:g}], got {val}")


def validate_bool(val: bool, name: str) -> None:
    if not isinstance(val, bool):
        raise ValidationError(f"{name} must be True or False")


def validate_length(val: str, name: str, lo: int, hi: int) -> None:
    if not isinstance(val, str):
        raise ValidationError(f"{name} must be a string")
    if not (lo <= len(val) <= hi):
        raise ValidationError(f"length of {name} must be in [{lo}, {hi}], got {len(val)}")


def validate_choice(val: Any, name: str, choices: tuple) -> None:
    if val not in choices:
        allowed = ", ".join(repr(c) for c in choices)
        raise ValidationError(f"{name} must be one of {allowed}, got {val!r}")


# === Coercion of returned data arrays ===

def as_ints(values: List[Any]) -> List[int]:
    out = []
    for i, value in enumerate(values):
        if isinstance(value, bool):
            raise TypeMismatchError(i, value, "int")
        if isinstance(value, int):
            out.append(value)
        elif isinstance(value, float) and value.is_integer():
            out.append(int(value))
        else:
            raise TypeMismatchError(i, value, "int")
    return out


def as_floats(values: List[Any]) -> List[float]:
    out = []
    for i, value in enumerate(values):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeMismatchError(i, value, "float")
        out.append(float(value))
    return out


def as_strings(values: List[Any]) -> List[str]:
    for i, value in enumerate(values):
        if not isinstance(value, str):
            raise TypeMismatchError(i, value, "str")
    return list(values)
