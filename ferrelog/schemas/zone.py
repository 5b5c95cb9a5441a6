# ferrelog/schemas/zone.py
from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class Zone(SQLModel):
    """
    Distance band with a flat shipping price.

    Reference data only; never persisted. The operator reads the distance
    in Maps and picks the matching band.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float
    estimated_time: str
    min_km: int
    max_km: int


class QuoteRead(SQLModel):
    """
    Result of quoting a zone.
    """

    zone_id: str
    zone_name: str
    price: float
    estimated_time: str


class AdviceRequest(SQLModel):
    """
    Free-text question for the logistics assistant.
    """

    model_config = ConfigDict(extra="forbid")

    prompt: str = Field(max_length=2000)

    @field_validator("prompt")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("prompt cannot be empty")
        return v


class AdviceRead(SQLModel):
    respuesta: str


class MapsLinkRead(SQLModel):
    url: str
