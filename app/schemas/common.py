from typing import Any, Dict
from pydantic import BaseModel
from pydantic.networks import validate_email

from app.core.exceptions import ValidationError


def normalize_email(value: str) -> str:
    """
    Normalize an address exactly as ``EmailStr`` does for request bodies.

    Query and path parameters go through this so lookups match the stored
    form (domain lowercased, local part kept).

    Raises:
        ValidationError: The value is not a valid email address
    """
    try:
        return validate_email(value)[1]
    except ValueError:
        raise ValidationError("Invalid email address")


class OpenPayload(BaseModel):
    """
    Request body that accepts keys beyond its declared fields.

    Used for profiles and job postings, whose field set is not fixed.
    """

    class Config:
        extra = "allow"
        populate_by_name = True

    def supplied_fields(self, *exclude: str) -> Dict[str, Any]:
        """Fields the client actually sent, plus any extra keys."""
        data = {
            name: getattr(self, name)
            for name in self.model_fields_set
            if name in type(self).model_fields and name not in exclude
        }
        data.update(self.model_extra or {})
        return data
