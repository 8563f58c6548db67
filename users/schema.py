from validation import RecordValidator, create_insert_schema, create_select_schema
from . import model

# Fields a visitor may send through the public contact form
CONTACT_FORM_FIELDS = ("name", "email", "company", "service", "message")

# User Schemas
insert_user_schema = create_insert_schema(model.User, name="UserCreate")
select_user_schema = create_select_schema(model.User, name="UserResponse")

# Contact Submission Schemas
insert_contact_submission_schema = create_insert_schema(model.ContactSubmission, name="ContactSubmissionInsert")
create_contact_submission_schema = insert_contact_submission_schema.pick(
    *CONTACT_FORM_FIELDS, name="ContactSubmissionCreate"
)
select_contact_submission_schema = create_select_schema(model.ContactSubmission, name="ContactSubmissionResponse")

# Pydantic models for type hints and FastAPI response models
UserCreate = insert_user_schema.model
ContactSubmissionCreate = create_contact_submission_schema.model
ContactSubmissionResponse = select_contact_submission_schema.model


def get_contact_validator() -> RecordValidator:
    return create_contact_submission_schema


def get_contact_response_validator() -> RecordValidator:
    return select_contact_submission_schema
