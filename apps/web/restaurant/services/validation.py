"""Shared helpers for turning pydantic errors into API error details."""

from pydantic import ValidationError as PydanticValidationError

from apps.web.restaurant.serializers import ValidationErrorDetail


def error_details(exc: PydanticValidationError) -> list[dict[str, str]]:
    """Flatten a pydantic ValidationError into {field, message} dicts."""
    return [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in err["loc"]) or "body",
            message=err["msg"],
        ).model_dump()
        for err in exc.errors()
    ]
