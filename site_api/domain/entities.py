from pydantic import BaseModel, Field


class Caller(BaseModel):
    """The authenticated principal behind a request."""

    id: str
    roles: list[str] = Field(default_factory=list)
