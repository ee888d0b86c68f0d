"""
Pydantic schemas for the quote request form and the admin quote list.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Checked in this order; the first missing one is reported
REQUIRED_FIELDS = (
    "event_name",
    "event_date",
    "event_place",
    "contact_name",
    "contact_phone",
    "contact_email",
)

OPTIONAL_FIELDS = (
    "event_duration",
    "led_type",
    "led_size",
    "led_content",
    "power",
    "extra",
    "contact_company",
)


class QuoteCreate(BaseModel):
    """
    Request body for POST /api/quotes.

    Every field is optional at the schema level so that presence can be
    checked field by field and reported as "Missing <field>" (400) rather
    than a 422 listing.
    """

    event_name: Optional[str] = Field(None, alias="eventName", description="Event name")
    event_date: Optional[str] = Field(None, alias="eventDate", description="Event date")
    event_place: Optional[str] = Field(None, alias="eventPlace", description="Venue")
    event_duration: Optional[str] = Field(None, alias="eventDuration", description="Operating period (optional)")
    led_type: Optional[str] = Field(None, alias="ledType", description="Equipment type (optional)")
    led_size: Optional[str] = Field(None, alias="ledSize", description="Screen size (optional)")
    led_content: Optional[str] = Field(None, alias="ledContent", description="Content to display (optional)")
    power: Optional[str] = Field(None, alias="power", description="Power supply (optional)")
    extra: Optional[str] = Field(None, alias="extra", description="Other requests (optional)")
    contact_name: Optional[str] = Field(None, alias="contactName", description="Contact person")
    contact_company: Optional[str] = Field(None, alias="contactCompany", description="Company / organization (optional)")
    contact_phone: Optional[str] = Field(None, alias="contactPhone", description="Contact number")
    contact_email: Optional[str] = Field(None, alias="contactEmail", description="Email address")

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "eventName": "Launch",
                "eventDate": "2024-05-01",
                "eventPlace": "Seoul",
                "ledType": "P3.9 outdoor",
                "contactName": "Kim",
                "contactPhone": "010-1111-2222",
                "contactEmail": "a@b.com",
            }
        },
    )

    @model_validator(mode="before")
    @classmethod
    def payload_as_dict(cls, data: Any) -> Any:
        # Non-JSON bodies reach the model as raw bytes; they carry no fields
        if not isinstance(data, dict):
            return {}
        return data

    @field_validator("*", mode="before")
    @classmethod
    def numbers_as_text(cls, value: Any) -> Any:
        """Form widgets may post phone numbers or sizes as JSON numbers; store them as text."""
        if isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (int, float)):
            return str(value)
        return value

    def first_missing_field(self) -> Optional[str]:
        """Return the API name of the first required field that is missing or empty."""
        for name in REQUIRED_FIELDS:
            if not getattr(self, name):
                return type(self).model_fields[name].alias
        return None


class QuoteOut(BaseModel):
    """Single stored quote as returned to the admin page."""

    id: int
    event_name: str = Field(..., alias="eventName")
    event_date: str = Field(..., alias="eventDate")
    event_place: str = Field(..., alias="eventPlace")
    event_duration: str = Field("", alias="eventDuration")
    led_type: str = Field("", alias="ledType")
    led_size: str = Field("", alias="ledSize")
    led_content: str = Field("", alias="ledContent")
    power: str = Field("", alias="power")
    extra: str = Field("", alias="extra")
    contact_name: str = Field(..., alias="contactName")
    contact_company: str = Field("", alias="contactCompany")
    contact_phone: str = Field(..., alias="contactPhone")
    contact_email: str = Field(..., alias="contactEmail")
    created_at: str = Field(..., alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class OkResponse(BaseModel):
    ok: bool = True
