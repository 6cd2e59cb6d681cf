from typing import Any


def reject_null(value: Any) -> Any:
    """Before-validator for partial updates of NOT NULL columns.

    Omitting a field leaves it unchanged; sending an explicit null is an error.
    """
    if value is None:
        raise ValueError("must not be null")
    return value
