"""Example validators used by ``fieldval demo``.

Shows both ways of declaring chains: field by field on one validator
(users) and in bulk with ``configure`` (flowers, gardens).
"""

import re
from datetime import UTC, datetime
from typing import Any

from .report import RecordReport
from .rules import parse_date
from .validator import Validator, create_validator

HEX_COLOR = re.compile(r"^#[0-9A-F]{6}$", re.IGNORECASE)
PROMO_CODE = re.compile(r"^[A-Z0-9]{5,10}$")


def _has_upper_and_digit(value: Any) -> bool:
    return isinstance(value, str) and bool(re.search(r"[A-Z]", value)) and bool(re.search(r"[0-9]", value))


def _in_the_past(value: Any) -> bool:
    moment = parse_date(value)
    if moment is None:
        return False
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment < datetime.now(UTC)


def build_user_validator() -> Validator:
    validator = create_validator()

    validator.field("username") \
        .required("Username is required") \
        .string("Username must be a string") \
        .alphanumeric("Username must be alphanumeric") \
        .lowercase("Username must be in lowercase") \
        .length(5, 15, "Username must be between 5 and 15 characters")

    validator.field("age") \
        .required("Age is required") \
        .number("Age must be a number") \
        .min(18, "Age must be at least 18") \
        .max(65, "Age must be at most 65")

    validator.field("email") \
        .required("Email is required") \
        .email("Email must be valid")

    validator.field("password") \
        .required("Password is required") \
        .string("Password must be a string") \
        .min(8, "Password must be at least 8 characters") \
        .custom(_has_upper_and_digit, "Password must contain at least one uppercase letter and one number")

    validator.field("isAdmin").boolean("isAdmin must be a boolean")
    validator.field("gender").enum(["male", "female"], "Invalid gender")
    validator.field("profileUrl").url("Profile URL must be valid")
    validator.field("birthDate").date("Birth date must be a valid date")
    validator.field("promoCode").pattern(
        PROMO_CODE, "Promo code must be 5-10 uppercase alphanumeric characters"
    )

    return validator


def build_flower_validator() -> Validator:
    validator = create_validator()
    validator.configure({
        "name": lambda f: f
            .required("Flower name is required")
            .string("Flower name must be a string")
            .alphanumeric("Flower name must be alphanumeric")
            .lowercase("Flower name must be in lowercase")
            .length(3, 50, "Flower name must be between 3 and 50 characters"),
        "petals": lambda f: f
            .required("Number of petals is required")
            .number("Number of petals must be a number")
            .min(1, "Number of petals must be at least 1")
            .max(100, "Number of petals must be at most 100"),
        "color": lambda f: f
            .required("Color is required")
            .string("Color must be a string")
            .pattern(HEX_COLOR, "Color must be a valid hex code"),
        "species": lambda f: f
            .required("Species is required")
            .string("Species must be a string"),
        "bloomingSeason": lambda f: f
            .required("Blooming season is required")
            .enum(["spring", "summer", "autumn", "winter"], "Invalid blooming season"),
        "isFragrant": lambda f: f.boolean("isFragrant must be a boolean"),
        "plantedDate": lambda f: f
            .required("Planted date is required")
            .date("Planted date must be a valid date")
            .custom(_in_the_past, "Planted date must be in the past"),
        "website": lambda f: f.url("Website must be a valid URL"),
    })
    return validator


def build_garden_validator() -> Validator:
    validator = create_validator()
    validator.configure({
        "name": lambda f: f
            .required("Garden name is required")
            .string("Garden name must be a string")
            .alphanumeric("Garden name must be alphanumeric")
            .uppercase("Garden name must be in uppercase")
            .length(5, 100, "Garden name must be between 5 and 100 characters"),
        "location": lambda f: f
            .required("Location is required")
            .string("Location must be a string"),
        "establishedYear": lambda f: f
            .required("Established year is required")
            .number("Established year must be a number")
            .min(1900, "Established year must be no earlier than 1900")
            .max(datetime.now(UTC).year, "Established year cannot be in the future"),
        "website": lambda f: f.url("Website must be a valid URL"),
        "isPublic": lambda f: f.boolean("isPublic must be a boolean"),
    })
    return validator


SAMPLE_USER = {
    "username": "khanhnguyen",
    "age": 22,
    "email": "khanh.nguyen@example.com",
    "password": "Password123",
    "gender": "male",
    "isAdmin": True,
    "profileUrl": "https://example.com/profile/khanhnguyen",
    "birthDate": "2002-01-01",
    "promoCode": "PROMO2024",
}

SAMPLE_FLOWER = {
    "name": "rose",
    "petals": 30,
    "color": "#FF5733",
    "species": "rosa",
    "bloomingSeason": "spring",
    "isFragrant": True,
    "plantedDate": "2024-01-01T11:06:07+00:00",
    "website": "https://example.com/flower/rose",
}

SAMPLE_GARDEN = {
    "name": "MYGARDEN",
    "location": "Quang Nam, Vietnam",
    "establishedYear": 2000,
    "website": "https://example.com/garden/mygarden",
    "isPublic": True,
}


def run_demo() -> list[RecordReport]:
    """Validate the bundled sample records."""
    return [
        RecordReport("user", build_user_validator().validate(SAMPLE_USER)),
        RecordReport("flower", build_flower_validator().validate(SAMPLE_FLOWER)),
        RecordReport("garden", build_garden_validator().validate(SAMPLE_GARDEN)),
    ]
