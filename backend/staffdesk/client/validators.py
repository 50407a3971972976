"""Form checks applied before anything is sent to the API.

The ``validate_*_form`` helpers return a mapping of field name to the list of
failed rule codes (``required``, ``minlength``, ``maxlength``, ``pattern``,
``email``, ``phone``, ``min``, ``max``). An empty mapping means the form is
valid.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

NAME_PATTERN = re.compile(r"^[a-zA-Zа-яА-ЯёЁ\s\-]+$")
PHONE_PATTERN = re.compile(r"^(?:\d{6}|\+(?P<country>\d{1,3})\((?P<area>\d{1,4})\)\d{7})$", re.ASCII)
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Country code -> exact area code length; anything else allows 1-4 digits.
AREA_CODE_LENGTHS = {"375": 2, "7": 3}

MAX_SALARY = 1_000_000
Errors = dict[str, list[str]]


def is_valid_name(value: str) -> bool:
    return bool(NAME_PATTERN.fullmatch(value.strip()))


def is_valid_phone(value: str) -> bool:
    match = PHONE_PATTERN.fullmatch(value.strip())
    if match is None:
        return False
    country = match.group("country")
    if country is None:
        return True
    expected = AREA_CODE_LENGTHS.get(country)
    return expected is None or len(match.group("area")) == expected


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value).strip()


def _check_name(errors: Errors, field: str, value: str, required: bool = True) -> None:
    problems = []
    if not value:
        if required:
            problems.append("required")
    else:
        if required and len(value) < 2:
            problems.append("minlength")
        if len(value) > 50:
            problems.append("maxlength")
        if not is_valid_name(value):
            problems.append("pattern")
    if problems:
        errors[field] = problems


def validate_employee_form(data: Mapping[str, Any]) -> Errors:
    errors: Errors = {}
    _check_name(errors, "first_name", _text(data, "first_name"))
    _check_name(errors, "last_name", _text(data, "last_name"))
    _check_name(errors, "middle_name", _text(data, "middle_name"), required=False)

    if data.get("position_id") in (None, ""):
        errors["position_id"] = ["required"]

    if len(_text(data, "address")) > 200:
        errors["address"] = ["maxlength"]

    email = _text(data, "contact_email")
    if not email:
        errors["contact_email"] = ["required"]
    elif not EMAIL_PATTERN.fullmatch(email):
        errors["contact_email"] = ["email"]

    phone = _text(data, "contact_phone")
    if not phone:
        errors["contact_phone"] = ["required"]
    elif not is_valid_phone(phone):
        errors["contact_phone"] = ["phone"]

    salary = data.get("salary")
    if salary in (None, ""):
        errors["salary"] = ["required"]
    else:
        try:
            amount = float(salary)
        except (TypeError, ValueError):
            errors["salary"] = ["pattern"]
        else:
            if amount < 0:
                errors["salary"] = ["min"]
            elif amount > MAX_SALARY:
                errors["salary"] = ["max"]
    return errors


def validate_position_form(name: Any) -> Errors:
    errors: Errors = {}
    _check_name(errors, "name", "" if name is None else str(name).strip())
    return errors


def validate_login_form(username: Any, password: Any) -> Errors:
    errors: Errors = {}
    cleaned = "" if username is None else str(username).strip()
    if not cleaned:
        errors["username"] = ["required"]
    elif len(cleaned) < 3:
        errors["username"] = ["minlength"]
    if not password:
        errors["password"] = ["required"]
    elif len(str(password)) < 4:
        errors["password"] = ["minlength"]
    return errors


def describe_errors(errors: Errors) -> str:
    return "; ".join(f"{field}: {', '.join(codes)}" for field, codes in errors.items())
