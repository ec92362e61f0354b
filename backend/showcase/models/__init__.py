"""Pydantic models for the submissions service."""

from showcase.models.submission import ErrorResponse, Submission, SubmitResponse

__all__ = ["Submission", "SubmitResponse", "ErrorResponse"]
