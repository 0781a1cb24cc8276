"""
Record API Schemas
Pydantic models for the /records request and response bodies
"""

from pydantic import BaseModel, ConfigDict, field_validator

from record_catalog_core.catalog import Record


class RecordPayload(BaseModel):
    """
    Incoming record body.

    Missing or null fields take their zero values so an absent id reaches
    the empty-id check instead of failing to parse. Strict mode rejects
    numbers where strings are expected; ints are still accepted for price.
    NaN and infinite prices are rejected since they cannot be rendered back
    as JSON.
    """

    model_config = ConfigDict(strict=True, extra="ignore", allow_inf_nan=False)

    id: str = ""
    title: str = ""
    artist: str = ""
    price: float = 0.0

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value, info):
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    def to_record(self) -> Record:
        return Record(id=self.id, title=self.title, artist=self.artist, price=self.price)


class RecordOut(BaseModel):
    id: str
    title: str
    artist: str
    price: float

    @classmethod
    def from_record(cls, record: Record) -> "RecordOut":
        return cls(**record.to_dict())


class MessageResponse(BaseModel):
    """Error body shared by every non-2xx response"""
    message: str
