"""User-facing message catalogue.

Every validation constraint and error path reads its text from here so messages
stay consistent between the schema layer, DTO construction and the datasource.
"""

from __future__ import annotations

from typing import Final

# Generic data validation
INVALID_FIELDS: Final = "Invalid fields"
UNKNOWN_VALIDATION_ERROR: Final = "Unknown validation error"
INVALID_DATA: Final = "Invalid data"
MALFORMED_JSON_BODY: Final = "Malformed JSON body"

# Generic HTTP
INTERNAL_SERVER_ERROR: Final = "Internal Server Error"
ROUTE_NOT_FOUND: Final = "Route not found"
REQUEST_FAILED: Final = "Request failed"

# Register
NAME_REQUIRED: Final = "Name is required"
NAME_MIN_LENGTH: Final = "Name must be at least 2 characters long"
NAME_MAX_LENGTH: Final = "Name cannot exceed 50 characters"
NAME_INVALID_FORMAT: Final = "Name can only contain letters and spaces"

LASTNAME_REQUIRED: Final = "Last name is required"
LASTNAME_MIN_LENGTH: Final = "Last name must be at least 2 characters long"
LASTNAME_MAX_LENGTH: Final = "Last name cannot exceed 50 characters"
LASTNAME_INVALID_FORMAT: Final = "Last name can only contain letters and spaces"

EMAIL_REQUIRED: Final = "Email is required"
EMAIL_INVALID_FORMAT: Final = "Must be a valid email"
EMAIL_MAX_LENGTH: Final = "Email cannot exceed 100 characters"

PASSWORD_REQUIRED: Final = "Password is required"
PASSWORD_MIN_LENGTH: Final = "Password must be at least 8 characters long"
PASSWORD_MAX_LENGTH: Final = "Password cannot exceed 128 characters"
PASSWORD_INVALID_FORMAT: Final = (
    "Password must contain at least: 1 lowercase, 1 uppercase, 1 number and 1 special character"
)

USER_NOT_CREATED: Final = "User not created"

# Login
INVALID_DATA_RECEIVED: Final = "Invalid data received"
INVALID_CREDENTIALS: Final = "Invalid credentials"
INVALID_AUTH_USER_DATA: Final = "Invalid auth user data"
