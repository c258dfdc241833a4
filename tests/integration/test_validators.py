"""End-to-end tests for realistic validator configurations."""

import re
from datetime import datetime

import pytest

from fieldval import create_validator
from fieldval.demo import (
    SAMPLE_FLOWER,
    SAMPLE_GARDEN,
    SAMPLE_USER,
    build_flower_validator,
    build_garden_validator,
    build_user_validator,
    run_demo,
)


def errors_for(results, field_name):
    for result in results:
        if result.field == field_name:
            return result.errors
    return []


@pytest.fixture
def product_validator():
    validator = create_validator()
    validator.configure({
        "name": lambda f: f.required("Name is required").string("Name must be a string"),
        "price": lambda f: f
            .required("Price is required")
            .number("Price must be a number")
            .min(0, "Price must be non-negative"),
        "category": lambda f: f.enum(["Electronics", "Clothing", "Food"], "Invalid category"),
        "inStock": lambda f: f.boolean("In stock must be a boolean"),
        "quantity": lambda f: f.number("Quantity must be a number").min(0, "Quantity must be non-negative"),
        "description": lambda f: f
            .string("Description must be a string")
            .max(1000, "Description must be 1000 characters or less"),
    })
    return validator


@pytest.fixture
def auth_validator():
    def strong(value):
        return isinstance(value, str) and bool(re.search(r"[A-Z]", value)) and bool(re.search(r"[0-9]", value))

    validator = create_validator()
    validator.configure({
        "email": lambda f: f.required("Email is required").email("Invalid email format"),
        "password": lambda f: f
            .required("Password is required")
            .min(8, "Password must be at least 8 characters")
            .custom(strong, "Password must contain at least one uppercase letter and one number"),
        "role": lambda f: f.enum(["admin", "user", "guest"], "Invalid role"),
        "rememberMe": lambda f: f.boolean("Remember me must be a boolean"),
    })
    return validator


class TestConfigureStyle:
    """Validators declared in bulk with configure()."""

    def test_valid_product(self, product_validator):
        product = {
            "name": "Laptop",
            "price": 1000,
            "category": "Electronics",
            "inStock": True,
            "quantity": 50,
            "description": "A powerful laptop",
        }
        assert product_validator.validate(product) == []

    def test_invalid_product(self, product_validator):
        product = {
            "name": 123,
            "price": "not a number",
            "category": "Invalid Category",
            "inStock": "not a boolean",
            "quantity": -5,
            "description": "A" * 1001,
        }
        results = product_validator.validate(product)

        assert len(results) == 6
        assert errors_for(results, "name") == ["Name must be a string"]
        assert errors_for(results, "price") == ["Price must be a number"]
        assert errors_for(results, "category") == ["Invalid category"]
        assert errors_for(results, "inStock") == ["In stock must be a boolean"]
        assert errors_for(results, "quantity") == ["Quantity must be non-negative"]
        assert errors_for(results, "description") == ["Description must be 1000 characters or less"]

    def test_valid_auth(self, auth_validator):
        auth = {"email": "user@example.com", "password": "StrongPass123", "role": "user", "rememberMe": True}
        assert auth_validator.validate(auth) == []

    def test_invalid_auth(self, auth_validator):
        auth = {"email": "not-an-email", "password": "weak", "role": "superuser", "rememberMe": "yes"}
        results = auth_validator.validate(auth)

        assert [result.field for result in results] == ["email", "password", "role", "rememberMe"]
        assert errors_for(results, "email") == ["Invalid email format"]
        assert errors_for(results, "password") == [
            "Password must be at least 8 characters",
            "Password must contain at least one uppercase letter and one number",
        ]

    def test_empty_record(self):
        validator = create_validator()
        validator.configure({"name": lambda f: f.required("Name is required")})

        results = validator.validate({})

        assert len(results) == 1
        assert results[0].field == "name"

    def test_dotted_names_are_not_traversed(self):
        validator = create_validator()
        validator.configure({
            "user.name": lambda f: f.required("User name is required"),
            "user.email": lambda f: f.email("Invalid email"),
        })

        results = validator.validate({"user": {"name": "Khanh", "email": "invalid"}})

        assert [result.field for result in results] == ["user.name", "user.email"]


class TestFieldStyle:
    """Validators declared field by field."""

    def test_book(self):
        validator = create_validator()
        validator.field("title") \
            .required("Title is required") \
            .string("Title must be a string") \
            .min(1, "Title must not be empty") \
            .max(100, "Title must not exceed 100 characters")
        validator.field("author").required("Author is required").string("Author must be a string")
        validator.field("publicationYear") \
            .number("Publication year must be a number") \
            .min(1000, "Invalid publication year") \
            .max(datetime.now().year, "Publication year cannot be in the future")
        validator.field("isbn") \
            .required("ISBN is required") \
            .custom(lambda v: isinstance(v, str) and re.fullmatch(r"\d{10}|\d{13}", v) is not None,
                    "Invalid ISBN format")

        valid = {
            "title": "The Great Gatsby",
            "author": "F. Scott Fitzgerald",
            "publicationYear": 1925,
            "isbn": "9780743273565",
        }
        assert validator.validate(valid) == []

        results = validator.validate({
            "title": "",
            "author": 123,
            "publicationYear": "not a year",
            "isbn": "invalid-isbn",
        })
        assert errors_for(results, "title") == ["Title is required", "Title must not be empty"]
        assert errors_for(results, "author") == ["Author must be a string"]
        assert errors_for(results, "publicationYear") == [
            "Publication year must be a number",
            "Invalid publication year",
        ]
        assert errors_for(results, "isbn") == ["Invalid ISBN format"]

    def test_recipe(self):
        validator = create_validator()
        validator.field("name").required("Recipe name is required").string("Recipe name must be a string")
        validator.field("ingredients") \
            .required("Ingredients are required") \
            .custom(lambda v: isinstance(v, list) and len(v) > 0, "Ingredients must be a non-empty list")
        validator.field("preparationTime") \
            .number("Preparation time must be a number") \
            .min(1, "Preparation time must be at least 1 minute")
        validator.field("difficulty").enum(["Easy", "Medium", "Hard"], "Invalid difficulty level")

        assert validator.validate({
            "name": "Chocolate Chip Cookies",
            "ingredients": ["flour", "sugar", "butter", "chocolate chips"],
            "preparationTime": 30,
            "difficulty": "Medium",
        }) == []

        results = validator.validate({
            "name": 123,
            "ingredients": "not a list",
            "preparationTime": 0,
            "difficulty": "Expert",
        })
        assert len(results) == 4
        assert errors_for(results, "ingredients") == ["Ingredients must be a non-empty list"]
        assert errors_for(results, "preparationTime") == ["Preparation time must be at least 1 minute"]


class TestDemo:
    """Bundled example validators."""

    def test_samples_pass(self):
        assert build_user_validator().validate(SAMPLE_USER) == []
        assert build_flower_validator().validate(SAMPLE_FLOWER) == []
        assert build_garden_validator().validate(SAMPLE_GARDEN) == []

    def test_run_demo(self):
        reports = run_demo()
        assert [report.label for report in reports] == ["user", "flower", "garden"]
        assert all(report.passed for report in reports)

    def test_flower_in_future_and_bad_color(self):
        flower = dict(SAMPLE_FLOWER, plantedDate="2999-01-01", color="red")
        results = build_flower_validator().validate(flower)

        assert errors_for(results, "plantedDate") == ["Planted date must be in the past"]
        assert errors_for(results, "color") == ["Color must be a valid hex code"]

    def test_flower_planted_date_in_other_formats(self):
        validator = build_flower_validator()
        for planted in ("March 1, 2023", "2023/03/01", "Wed, 01 Mar 2023 08:00:00 GMT"):
            flower = dict(SAMPLE_FLOWER, plantedDate=planted)
            assert errors_for(validator.validate(flower), "plantedDate") == []

    def test_garden_name_must_be_uppercase(self):
        garden = dict(SAMPLE_GARDEN, name="MyGarden")
        results = build_garden_validator().validate(garden)
        assert errors_for(results, "name") == ["Garden name must be in uppercase"]

    def test_user_missing_everything(self):
        results = build_user_validator().validate({})
        assert errors_for(results, "username")[0] == "Username is required"
        assert errors_for(results, "isAdmin") == ["isAdmin must be a boolean"]
        assert errors_for(results, "birthDate") == ["Birth date must be a valid date"]
