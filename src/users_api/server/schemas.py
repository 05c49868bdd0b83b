"""Pydantic schemas for request bodies."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class UserPayload(BaseModel):
    """Body of ``POST /users`` and ``PUT /users/{id}``.

    ``id`` is tolerated so clients can send back a record they fetched, but
    storage always decides the id.
    """

    model_config = ConfigDict(extra="forbid", strict=True)

    id: Optional[int] = Field(default=None, description="Ignored; assigned by storage")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Contact address, stored verbatim")


def parse_user_payload(body: bytes) -> Optional[UserPayload]:
    """Decode and validate a request body, or ``None`` if it is unusable.

    Malformed JSON, a non-object document, missing or unknown fields and
    wrongly typed values all count as unusable.
    """
    try:
        return UserPayload.model_validate_json(body)
    except ValidationError:
        return None
