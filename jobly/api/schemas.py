"""API request/response schemas.

Field names are snake_case in Python and camelCase on the wire.
"""

from urllib.parse import urlparse

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from jobly.security import MAX_PASSWORD_BYTES


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class RequestModel(CamelModel):
    """Incoming JSON body or query string; unknown fields are rejected."""

    class Config:
        extra = "forbid"


def _check_url(v: str | None) -> str | None:
    if v is None:
        return v
    p = urlparse(v)
    if not (p.scheme and p.netloc):
        raise ValueError("must be an absolute URL")
    return v


def _check_not_null(v):
    """Explicit null for a column that cannot hold one."""
    if v is None:
        raise ValueError("may not be null")
    return v


def _check_password_bytes(v: str | None) -> str | None:
    if v is not None and len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
    return v


# Company schemas
class CompanyNew(RequestModel):
    handle: str = Field(min_length=1, max_length=25)
    name: str = Field(min_length=1)
    description: str
    num_employees: int | None = Field(default=None, ge=0)
    logo_url: str | None = None

    @field_validator("logo_url")
    @classmethod
    def validate_logo_url(cls, v: str | None) -> str | None:
        return _check_url(v)


class CompanyUpdate(RequestModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    num_employees: int | None = Field(default=None, ge=0)
    logo_url: str | None = None

    @field_validator("logo_url")
    @classmethod
    def validate_logo_url(cls, v: str | None) -> str | None:
        return _check_url(v)

    @field_validator("name", "description")
    @classmethod
    def validate_not_null(cls, v):
        return _check_not_null(v)


class CompanySearch(RequestModel):
    name: str | None = Field(default=None, min_length=1)
    min_employees: int | None = Field(default=None, ge=0)
    max_employees: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_range(self):
        if (
            self.min_employees is not None
            and self.max_employees is not None
            and self.min_employees > self.max_employees
        ):
            raise ValueError("Min employees cannot be greater than max")
        return self


class CompanyResponse(CamelModel):
    handle: str
    name: str
    description: str | None
    num_employees: int | None
    logo_url: str | None


class CompanyJobResponse(CamelModel):
    id: int
    title: str
    salary: int | None
    equity: float | None


class CompanyDetailResponse(CompanyResponse):
    jobs: list[CompanyJobResponse]


class CompanyEnvelope(CamelModel):
    company: CompanyResponse


class CompanyDetailEnvelope(CamelModel):
    company: CompanyDetailResponse


class CompanyListResponse(CamelModel):
    companies: list[CompanyResponse]


# Job schemas
class JobNew(RequestModel):
    title: str = Field(min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: float | None = Field(default=None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25)


class JobUpdate(RequestModel):
    title: str | None = Field(default=None, min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: float | None = Field(default=None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def validate_not_null(cls, v):
        return _check_not_null(v)


class JobSearch(RequestModel):
    title: str | None = Field(default=None, min_length=1)
    min_salary: int | None = Field(default=None, ge=0)
    has_equity: bool | None = None


class JobResponse(CamelModel):
    id: int
    title: str
    salary: int | None
    equity: float | None
    company_handle: str


class JobListItem(JobResponse):
    company_name: str | None


class JobDetailResponse(CamelModel):
    id: int
    title: str
    salary: int | None
    equity: float | None
    company: CompanyResponse | None


class JobEnvelope(CamelModel):
    job: JobResponse


class JobDetailEnvelope(CamelModel):
    job: JobDetailResponse


class JobListResponse(CamelModel):
    jobs: list[JobListItem]


# User schemas
class UserAuth(RequestModel):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=1)


class UserRegister(RequestModel):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5)
    first_name: str = Field(min_length=1, max_length=30)
    last_name: str = Field(min_length=1, max_length=30)
    email: EmailStr

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_bytes(v)


class UserNew(UserRegister):
    is_admin: bool = False


class UserUpdate(RequestModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=30)
    last_name: str | None = Field(default=None, min_length=1, max_length=30)
    password: str | None = Field(default=None, min_length=5)
    email: EmailStr | None = None
    is_admin: bool | None = None

    @field_validator("first_name", "last_name", "password", "email", "is_admin")
    @classmethod
    def validate_not_null(cls, v):
        return _check_not_null(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return _check_password_bytes(v)


class UserResponse(CamelModel):
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetailResponse(UserResponse):
    applications: list[int]


class UserEnvelope(CamelModel):
    user: UserResponse


class UserDetailEnvelope(CamelModel):
    user: UserDetailResponse


class UserListResponse(CamelModel):
    users: list[UserResponse]


class UserTokenResponse(CamelModel):
    user: UserResponse
    token: str


class TokenResponse(BaseModel):
    token: str
