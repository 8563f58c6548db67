from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Optional
import logging

from pydantic import BaseModel
from . import model, schema

logger = logging.getLogger(__name__)


class UsernameTakenError(Exception):
    """Raised when the unique index on users.username rejects an insert."""

    def __init__(self, username: str):
        super().__init__(f"Username already taken: {username}")
        self.username = username


def _row_values(record: BaseModel) -> dict:
    # Omitted generated columns fall back to their database defaults
    return {k: v for k, v in record.model_dump().items() if v is not None}


def _commit_failed(exc: SQLAlchemyError) -> RuntimeError:
    logger.error(f"Database commit failed: {exc}")
    return RuntimeError("Database commit failed")


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise _commit_failed(exc) from exc


# ---------- User operations ---------- #

def create_user(db: Session, user_in: schema.UserCreate) -> model.User:
    """Persist a user accepted by ``insert_user_schema``.

    Raises:
        UsernameTakenError: if the username already exists.
        RuntimeError: if the commit fails for any other reason.
    """
    db_user = model.User(**_row_values(user_in))
    db.add(db_user)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        # Other constraints (e.g. a reused id) are not a username conflict
        if isinstance(exc, IntegrityError) and get_user_by_username(db, user_in.username) is not None:
            raise UsernameTakenError(user_in.username) from exc
        raise _commit_failed(exc) from exc

    db.refresh(db_user)
    return db_user


def get_user_by_username(db: Session, username: str) -> Optional[model.User]:
    return db.query(model.User).filter(model.User.username == username).first()


# ---------- Contact submission operations ---------- #

def create_contact_submission(db: Session, submission_in: schema.ContactSubmissionCreate) -> model.ContactSubmission:
    """Persist a submission accepted by ``create_contact_submission_schema``."""
    submission = model.ContactSubmission(**_row_values(submission_in))
    db.add(submission)
    _commit(db)
    db.refresh(submission)
    return submission


def get_contact_submission(db: Session, submission_id: int) -> Optional[model.ContactSubmission]:
    return db.query(model.ContactSubmission).filter(model.ContactSubmission.id == submission_id).first()
