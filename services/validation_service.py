"""
Form validation for RECOOK BOOK.

Signup, login, and recipe-submission checks run here, before any core
service is called. The services trust their inputs once past this point.
Each validator returns cleaned fields or raises ValidationError with one
message per offending field.
"""

import re
from typing import Any, Dict, List

from models import MIN_PREP_TIME_MINUTES, MAX_PREP_TIME_MINUTES
from .errors import ValidationError

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
STRENGTH_SYMBOLS = "@$!%*?&"


def is_valid_email(email: str) -> bool:
    """Validate email format"""
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def is_strong_password(password: str, min_length: int = 8) -> bool:
    """Check if password meets strength requirements"""
    if len(password) < min_length:
        return False

    has_upper = any(c.isupper() for c in password)
    has_lower = any(c.islower() for c in password)
    has_digit = any(c.isdigit() for c in password)

    return has_upper and has_lower and has_digit


def password_strength(password: str) -> str:
    """Strength label for the signup meter: '', 'Weak', 'Medium' or 'Strong'"""
    if not password:
        return ""

    score = sum([
        len(password) >= 8,
        any(c.islower() for c in password),
        any(c.isupper() for c in password),
        any(c.isdigit() for c in password),
        any(c in STRENGTH_SYMBOLS for c in password)
    ])

    if score < 3:
        return "Weak"
    elif score < 5:
        return "Medium"
    return "Strong"


def get_password_strength_feedback(password: str, min_length: int = 8) -> List[str]:
    """Get password strength feedback for UI"""
    feedback = []

    if len(password) < min_length:
        feedback.append(f"Password must be at least {min_length} characters long")

    if not any(c.isupper() for c in password):
        feedback.append("Password must contain at least one uppercase letter")

    if not any(c.islower() for c in password):
        feedback.append("Password must contain at least one lowercase letter")

    if not any(c.isdigit() for c in password):
        feedback.append("Password must contain at least one number")

    return feedback


def validate_signup_form(fields: Dict[str, Any], min_length: int = 8) -> Dict[str, Any]:
    """
    Validate signup form fields.

    Expects first_name, last_name, email, password, confirm_password,
    terms_agreed and optionally newsletter.

    Returns:
        Cleaned fields ready for AccountDirectory.create_account
    """
    errors = {}
    first_name = (fields.get('first_name') or '').strip()
    last_name = (fields.get('last_name') or '').strip()
    email = (fields.get('email') or '').strip()
    password = fields.get('password') or ''

    if not first_name:
        errors['first_name'] = "First name is required"

    if not last_name:
        errors['last_name'] = "Last name is required"

    if not is_valid_email(email):
        errors['email'] = "Please enter a valid email address"

    if not is_strong_password(password, min_length):
        errors['password'] = (
            f"Password must be at least {min_length} characters with uppercase, lowercase, and number"
        )

    if password != (fields.get('confirm_password') or ''):
        errors['confirm_password'] = "Passwords do not match"

    if not fields.get('terms_agreed'):
        errors['terms_agreed'] = "You must agree to the terms and conditions"

    if errors:
        raise ValidationError(errors)

    return {
        'first_name': first_name,
        'last_name': last_name,
        'email': email,
        'password': password,
        'newsletter': bool(fields.get('newsletter', False))
    }


def validate_login_form(email: str, password: str) -> None:
    errors = {}
    if not is_valid_email((email or '').strip()):
        errors['email'] = "Please enter a valid email address"
    if not password:
        errors['password'] = "Password is required"
    if errors:
        raise ValidationError(errors)


REQUIRED_RECIPE_FIELDS = [
    ('title', "Recipe title"),
    ('category', "Category"),
    ('prep_time', "Prep time"),
    ('leftover_ingredients', "Leftover ingredients"),
    ('instructions', "Instructions"),
    ('author', "Author name")
]


def validate_recipe_form(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a recipe submission.

    Returns:
        Cleaned fields ready for RecipeCatalog.add, with prep_time as int
    """
    errors = {}
    cleaned = {}

    for key, label in REQUIRED_RECIPE_FIELDS:
        value = str(fields.get(key) if fields.get(key) is not None else '').strip()
        if not value:
            errors[key] = f"{label} is required"
        cleaned[key] = value

    if 'prep_time' not in errors:
        try:
            prep_time = int(cleaned['prep_time'])
        except ValueError:
            prep_time = None
        if prep_time is None or not MIN_PREP_TIME_MINUTES <= prep_time <= MAX_PREP_TIME_MINUTES:
            errors['prep_time'] = (
                f"Prep time must be between {MIN_PREP_TIME_MINUTES} and {MAX_PREP_TIME_MINUTES} minutes"
            )
        else:
            cleaned['prep_time'] = prep_time

    if errors:
        raise ValidationError(errors)

    cleaned['additional_ingredients'] = (fields.get('additional_ingredients') or '').strip()
    cleaned['tips'] = (fields.get('tips') or '').strip()
    return cleaned
