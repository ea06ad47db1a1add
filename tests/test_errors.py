from __future__ import annotations

from core.errors import NOT_FOUND_MESSAGE, RecordNotFoundError, validation_message


def test_path_errors_name_the_parameter():
    errors = [{"loc": ("path", "date"), "msg": "Input should be a valid integer", "input": "abc"}]
    assert validation_message(errors) == "Invalid date: abc"


def test_body_errors_are_joined():
    errors = [
        {"loc": ("body", "day"), "msg": "Input should be a valid string", "input": 7},
        {"loc": ("body", "tasks"), "msg": "Input should be a valid string", "input": 8},
    ]
    assert validation_message(errors) == (
        "Failed to bind JSON: day: Input should be a valid string; tasks: Input should be a valid string"
    )


def test_missing_body():
    errors = [{"loc": ("body",), "msg": "Field required", "input": None}]
    assert validation_message(errors) == "Failed to bind JSON: body: Field required"


def test_not_found_carries_key():
    exc = RecordNotFoundError(9)
    assert exc.key == 9
    assert str(exc) == NOT_FOUND_MESSAGE
