from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE = re.compile(r"^[\d\s\-\+\(\)]+$")
MIN_PASSWORD_LENGTH = 6

_CREATE_REQUIRED: tuple[tuple[str, str], ...] = (
    ("name", "Shop name is required"),
    ("address", "Address is required"),
    ("owner_name", "Owner name is required"),
    ("phone", "Phone number is required"),
    ("email", "Email is required"),
    ("username", "Username is required"),
    ("password", "Password is required"),
)


@dataclass
class ValidationResult:
    ok: bool
    field_errors: dict[str, str] = field(default_factory=dict)
    summary: list[str] = field(default_factory=list)


def _result(errors: dict[str, str]) -> ValidationResult:
    return ValidationResult(ok=not errors, field_errors=errors, summary=list(errors.values()))


def _text(form: Mapping[str, Any], key: str) -> str:
    return str(form.get(key) or "").strip()


def is_valid_amount(raw: str) -> bool:
    try:
        amount = Decimal(raw)
    except InvalidOperation:
        return False
    return amount.is_finite() and amount >= 0


def _check_contact(form: Mapping[str, Any], errors: dict[str, str]) -> None:
    email = _text(form, "email")
    if email and "email" not in errors and not _EMAIL.match(email):
        errors["email"] = "Please enter a valid email address"
    phone = _text(form, "phone")
    if phone and "phone" not in errors and not _PHONE.match(phone):
        errors["phone"] = "Please enter a valid phone number"


def validate_create_shop(form: Mapping[str, Any]) -> ValidationResult:
    errors: dict[str, str] = {}
    for key, message in _CREATE_REQUIRED:
        if not _text(form, key):
            errors[key] = message
    password = str(form.get("password") or "")
    if password and len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = "Password must be at least 6 characters"
    if password != str(form.get("confirm_password") or ""):
        errors["confirm_password"] = "Passwords do not match"
    _check_contact(form, errors)
    return _result(errors)


def validate_edit_shop(form: Mapping[str, Any]) -> ValidationResult:
    errors: dict[str, str] = {}
    if not _text(form, "name"):
        errors["name"] = "Shop name is required"
    if not _text(form, "address"):
        errors["address"] = "Address is required"
    _check_contact(form, errors)
    return _result(errors)


def validate_frame_form(form: Mapping[str, Any]) -> ValidationResult:
    errors: dict[str, str] = {}
    if not _text(form, "product_id"):
        errors["product_id"] = "Product ID is required"
    if not _text(form, "name"):
        errors["name"] = "Frame name is required"
    if not is_valid_amount(_text(form, "price")):
        errors["price"] = "Please enter a valid price"
    return _result(errors)
