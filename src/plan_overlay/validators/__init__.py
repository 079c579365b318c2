"""Form validation.

- building forms: name uniqueness, complete floor-button set, boundary list
- parking forms: name uniqueness, at least one section, plan image and spaces per section
"""

from plan_overlay.validators.forms import (
    FormValidationError,
    ValidationError,
    blocking,
    validate_building_form,
    validate_parking_form,
)

__all__ = [
    "FormValidationError",
    "ValidationError",
    "blocking",
    "validate_building_form",
    "validate_parking_form",
]
