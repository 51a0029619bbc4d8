"""Compiled validation patterns shared by the request schemas."""

from __future__ import annotations

import re

# Letters (including Latin-1 accented letters such as á, ñ, ü) and plain spaces.
NAME_LASTNAME_REGEX = re.compile(r"^[A-Za-zÀ-ÖØ-öø-ÿ ]+$")

# One lowercase, one uppercase, one digit, one symbol; nothing outside that alphabet.
SECURE_PASSWORD_REGEX = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&#^\-_.+=])[A-Za-z\d@$!%*?&#^\-_.+=]+$"
)

EMAIL_BASIC_REGEX = re.compile(
    r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9\-]+(\.[A-Za-z0-9\-]+)*\.[A-Za-z]{2,}$"
)

PHONE_INTERNATIONAL_REGEX = re.compile(r"^\+[1-9]\d{6,14}$")

POSTAL_CODE_REGEX = re.compile(r"^\d{4,10}$")

URL_REGEX = re.compile(
    r"^https?://"
    r"(?:(?:[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])?\.)+[A-Za-z]{2,6}|\d{1,3}(?:\.\d{1,3}){3})"
    r"(?::\d{1,5})?"
    r"(?:[/?#]\S*)?$"
)
