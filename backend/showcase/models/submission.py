"""Pydantic models for submissions."""

from pydantic import BaseModel, Field


class Submission(BaseModel):
    """A submitter together with the filenames of their stored images."""

    id: int
    name: str
    social_media: str
    images: list[str] = Field(default_factory=list)


class SubmitResponse(BaseModel):
    """Response from a successful submission."""

    message: str


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
