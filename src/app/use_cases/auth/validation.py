"""
Input validation for auth commands.

Each validator returns a field -> messages map; an empty map means valid.
"""

import re
from typing import Dict, List

from email_validator import EmailNotValidError, validate_email

from .dtos import LoginCommand, RegisterCommand

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_BYTES = 72  # bcrypt input limit
NAME_MAX_LENGTH = 100
PASSWORD_SPECIAL_CHARACTERS = "@$!%*?&"

_PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (
        re.compile(r"[@$!%*?&]"),
        f"Password must contain at least one special character ({PASSWORD_SPECIAL_CHARACTERS})",
    ),
)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _email_errors(email: str) -> List[str]:
    if not email or not email.strip():
        return ["Email is required"]
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return ["Please provide a valid email address"]
    return []


def _name_errors(value: str, label: str) -> List[str]:
    if not value or not value.strip():
        return [f"{label} is required"]
    if len(value.strip()) > NAME_MAX_LENGTH:
        return [f"{label} must be at most {NAME_MAX_LENGTH} characters long"]
    return []


def _password_errors(password: str) -> List[str]:
    if not password:
        return ["Password is required"]
    errors = []
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        errors.append(f"Password must be at most {PASSWORD_MAX_BYTES} bytes long")
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(password):
            errors.append(message)
    return errors


def validate_registration(command: RegisterCommand) -> Dict[str, List[str]]:
    candidates = {
        "email": _email_errors(command.email),
        "first_name": _name_errors(command.first_name, "First name"),
        "last_name": _name_errors(command.last_name, "Last name"),
        "password": _password_errors(command.password),
    }
    return {field: messages for field, messages in candidates.items() if messages}


def validate_login(command: LoginCommand) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    email_errors = _email_errors(command.email)
    if email_errors:
        errors["email"] = email_errors
    if not command.password:
        errors["password"] = ["Password is required"]
    return errors
