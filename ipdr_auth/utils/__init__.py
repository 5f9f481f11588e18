from .validation import ValidationResult, validate_email, validate_registration, validate_username

__all__ = ["ValidationResult", "validate_email", "validate_registration", "validate_username"]
