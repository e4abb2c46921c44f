import re

from rest_framework import serializers

_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9]+$")

MIN_USERNAME_LENGTH = 4
MIN_PASSWORD_LENGTH = 6


def validate_username(value: str) -> str:
    """
    Ensures that the username is at least 4 characters long and only contains
    alphanumeric characters.
    """
    if value is None:
        raise serializers.ValidationError("Username is required.")
    trimmed = value.strip()
    if len(trimmed) < MIN_USERNAME_LENGTH:
        raise serializers.ValidationError(
            "Username must be at least 4 characters long."
        )
    if not _USERNAME_PATTERN.match(trimmed):
        raise serializers.ValidationError(
            "Username may contain only letters and numbers."
        )
    return trimmed


def validate_password(value: str) -> str:
    if value is None:
        raise serializers.ValidationError("Password is required.")
    if len(value) < MIN_PASSWORD_LENGTH:
        raise serializers.ValidationError(
            "Password must be at least 6 characters long."
        )
    return value
