"""Offering catalog schemas."""

from pydantic import BaseModel


class OfferingRead(BaseModel):
    name: str
    credits: int

    model_config = {"from_attributes": True}
