"""API routes for form submissions."""

import logging
from typing import Annotated

import aiosqlite
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from showcase.config import Settings
from showcase.db.submission_store import SubmissionStore
from showcase.dependencies import get_image_store, get_settings, get_submission_store
from showcase.models import ErrorResponse, Submission, SubmitResponse
from showcase.storage.image_store import ImageStore

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_FIELDS = "Missing required fields"


@router.post(
    "/submit",
    response_model=SubmitResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def submit(
    store: Annotated[SubmissionStore, Depends(get_submission_store)],
    image_store: Annotated[ImageStore, Depends(get_image_store)],
    settings: Annotated[Settings, Depends(get_settings)],
    name: Annotated[str | None, Form()] = None,
    social_media: Annotated[str | None, Form(alias="socialMedia")] = None,
    images: Annotated[list[UploadFile] | None, File(description="Images to attach")] = None,
) -> SubmitResponse:
    """Accept a submission: display name, social-media handle and images.

    Every image is stored under a generated name, then the submitter and one
    image row per file are written in a single transaction. If the write
    fails, the files stored for this request are removed again.
    """
    # Browsers send an empty part when no file was chosen
    files = [file for file in images or [] if file.filename]

    if not name or not social_media or not files:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_FIELDS)

    if len(files) > settings.max_images:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Too many files. Maximum is {settings.max_images} images per submission.",
        )

    stored_filenames: list[str] = []
    try:
        for file in files:
            content = await file.read()
            stored = await image_store.save(
                original_filename=file.filename,
                content=content,
                content_type=file.content_type,
            )
            stored_filenames.append(stored.filename)

        await store.create_submission(name, social_media, stored_filenames)

    except (aiosqlite.Error, OSError) as e:
        logger.exception(f"Error storing submission for {name!r}: {e}")
        try:
            await image_store.delete(stored_filenames)
        except OSError as cleanup_error:
            logger.exception(f"Could not remove stored images {stored_filenames}: {cleanup_error}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )

    return SubmitResponse(message="User and images added successfully")


@router.get(
    "/submissions",
    response_model=list[Submission],
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}},
)
async def list_submissions(
    store: Annotated[SubmissionStore, Depends(get_submission_store)],
) -> list[Submission]:
    """List every submission with the filenames of its images."""
    try:
        return await store.list_submissions()
    except aiosqlite.Error as e:
        logger.exception(f"Error fetching submissions: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )


@router.get(
    "/submissions/{submission_id}",
    response_model=Submission,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def get_submission(
    submission_id: int,
    store: Annotated[SubmissionStore, Depends(get_submission_store)],
) -> Submission:
    """Get one submission by its id."""
    try:
        submission = await store.get_submission(submission_id)
    except aiosqlite.Error as e:
        logger.exception(f"Error fetching submission {submission_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )

    if submission is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")
    return submission
