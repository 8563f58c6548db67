from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Any
import logging

from database import get_db
from validation import RecordValidator
from . import crud, schema

logger = logging.getLogger(__name__)

contact_router = APIRouter(
    prefix="/contact",
    tags=["contact"]
)

# Contact form route
@contact_router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_model=schema.ContactSubmissionResponse,
    responses={422: {"description": "Validation error"}},
)
def submit_contact_form(
    payload: Any = Body(...),
    db: Session = Depends(get_db),
    validator: RecordValidator = Depends(schema.get_contact_validator),
    response_validator: RecordValidator = Depends(schema.get_contact_response_validator),
):
    """Validate a contact form payload and store it."""
    result = validator.validate(payload)
    if not result.success:
        logger.warning(f"Rejected contact submission: {', '.join(result.failure.fields)}")
        return JSONResponse(
            status_code=422,
            content=result.failure.to_response(),
        )

    try:
        submission = crud.create_contact_submission(db, result.record)
    except RuntimeError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during contact submission.",
        )

    stored = response_validator.validate(submission)
    if not stored.success:
        logger.error(f"Stored contact submission {submission.id} has an unexpected shape: {stored.failure.fields}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during contact submission.",
        )

    logger.info(f"Contact submission {submission.id} stored")
    return stored.record
