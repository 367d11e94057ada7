"""Contact form schemas."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Services offered in the contact form's select, value -> label
SERVICE_CHOICES: dict[str, str] = {
    "mowing": "Lawn Mowing",
    "hedge-trimming": "Hedge Trimming",
    "leaf-clearance": "Leaf Clearance",
    "garden-maintenance": "Garden Maintenance",
    "landscaping": "Landscaping",
    "other": "Something Else",
}

# Field signals bound to the form inputs
FORM_FIELDS = ("name", "email", "phone", "service", "message")


class ContactSubmission(BaseModel):
    """Contact form submission. Missing fields arrive as empty strings."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    service: str = ""
    message: str = ""


class ContactSignals(BaseModel):
    """
    Signal patch sent back to the contact form.

    Unset (None) signals are left out of the patch so the browser keeps
    its current values for them.
    """

    model_config = ConfigDict(populate_by_name=True)

    show_success: Optional[bool] = Field(default=None, alias="showSuccess")
    show_error: Optional[bool] = Field(default=None, alias="showError")
    error_message: Optional[str] = Field(default=None, alias="errorMessage")
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    service: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def success(cls) -> "ContactSignals":
        """Show the thank-you panel and clear every field."""
        return cls(
            show_success=True,
            show_error=False,
            error_message="",
            **{field: "" for field in FORM_FIELDS},
        )

    @classmethod
    def failure(cls, error_message: str) -> "ContactSignals":
        """Show the error banner, leaving the typed-in fields untouched."""
        return cls(show_success=False, show_error=True, error_message=error_message)

    def to_patch(self) -> dict:
        """Signal name -> value mapping for the wire."""
        return self.model_dump(by_alias=True, exclude_none=True)
