"""
Request schemas for the JSON API.

Each model describes one request body (or query string). Field names follow
the camelCase keys the frontend sends; the Python attributes are snake_case.
"""
from datetime import date, datetime, timezone
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError as PydanticValidationError, field_validator
from pydantic.alias_generators import to_camel
from skillforge.errors import ValidationError

Category = Literal['frontend', 'backend', 'database', 'devops', 'mobile', 'other']
Priority = Literal['low', 'medium', 'high']
Status = Literal['not-started', 'in-progress', 'completed', 'paused']


class RequestSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra='ignore',
    )


def parse(schema, data):
    """Validate ``data`` against ``schema`` or raise the API ValidationError."""
    try:
        return schema.model_validate(data or {})
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc)


def _to_naive_utc(value):
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# ----- auth -----

class RegisterRequest(RequestSchema):
    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator('email')
    @classmethod
    def lower_email(cls, value):
        return value.lower()


class LoginRequest(RequestSchema):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator('email')
    @classmethod
    def lower_email(cls, value):
        return value.lower()


class ProfileUpdateRequest(RequestSchema):
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    email: Optional[EmailStr] = None
    current_password: Optional[str] = Field(None, min_length=1)
    new_password: Optional[str] = Field(None, min_length=6)

    @field_validator('email')
    @classmethod
    def lower_email(cls, value):
        return value.lower() if value else value


class DeleteAccountRequest(RequestSchema):
    password: str = Field(min_length=1)


# ----- skills -----

class SkillRequest(RequestSchema):
    name: str = Field(min_length=1, max_length=100)
    category: Category
    proficiency: int = Field(ge=1, le=5)
    experience: float = Field(ge=0)
    last_used: date
    notes: Optional[str] = Field(None, max_length=500)


class SkillPatchRequest(RequestSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[Category] = None
    proficiency: Optional[int] = Field(None, ge=1, le=5)
    experience: Optional[float] = Field(None, ge=0)
    last_used: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=500)


class SkillQuery(RequestSchema):
    category: Optional[Category] = None
    search: Optional[str] = None
    sort: str = 'name'
    order: Literal['asc', 'desc'] = 'asc'


# ----- goals -----

class GoalFields(RequestSchema):
    description: Optional[str] = Field(None, max_length=1000)
    status: Optional[Status] = None
    target_date: Optional[datetime] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    resources: Optional[List[str]] = None

    @field_validator('target_date', mode='before')
    @classmethod
    def blank_date(cls, value):
        # the frontend sends "" for a cleared date picker
        if value == '':
            return None
        if isinstance(value, str) and len(value) == 10:
            return f'{value}T00:00:00'
        return value

    @field_validator('target_date')
    @classmethod
    def naive_date(cls, value):
        return _to_naive_utc(value) if value else value

    @field_validator('resources')
    @classmethod
    def strip_resources(cls, value):
        if value is None:
            return value
        return [item.strip() for item in value if item.strip()]


class GoalCreateRequest(GoalFields):
    title: str = Field(min_length=1, max_length=200)
    target_skill: str = Field(min_length=1)
    priority: Priority = 'medium'

    @field_validator('target_date')
    @classmethod
    def in_future(cls, value):
        if value is None:
            return value
        value = _to_naive_utc(value)
        if value <= datetime.now(timezone.utc).replace(tzinfo=None):
            raise ValueError('Target date must be in the future')
        return value


class GoalUpdateRequest(GoalFields):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    target_skill: Optional[str] = Field(None, min_length=1)
    priority: Optional[Priority] = None


class ProgressRequest(RequestSchema):
    progress: int = Field(ge=0, le=100)


class GoalQuery(RequestSchema):
    status: Optional[Status] = None
    priority: Optional[Priority] = None
    search: Optional[str] = None
    sort: str = 'createdAt'
    order: Literal['asc', 'desc'] = 'desc'


# ----- ai -----

class SkillGapRequest(RequestSchema):
    target_role: str = Field(min_length=1, max_length=100)
