"""Database table models."""

from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobly.db.base import Base


class Company(Base):
    """A hiring company, keyed by its handle."""

    __tablename__ = "companies"
    __table_args__ = (CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),)

    handle: Mapped[str] = mapped_column(String(25), primary_key=True)
    name: Mapped[str] = mapped_column(Text, unique=True)
    num_employees: Mapped[int | None] = mapped_column(Integer, default=None)
    description: Mapped[str] = mapped_column(Text, default="")
    logo_url: Mapped[str | None] = mapped_column(Text, default=None)

    jobs: Mapped[list["Job"]] = relationship(back_populates="company", passive_deletes=True)


class Job(Base):
    """A job posting belonging to one company."""

    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_jobs_salary"),
        CheckConstraint("equity <= 1.0", name="ck_jobs_equity"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text)
    salary: Mapped[int | None] = mapped_column(Integer, default=None)
    equity: Mapped[Decimal | None] = mapped_column(Numeric, default=None)
    company_handle: Mapped[str] = mapped_column(ForeignKey("companies.handle", ondelete="CASCADE"))

    company: Mapped["Company"] = relationship(back_populates="jobs")


class User(Base):
    """User account. ``password`` holds a bcrypt hash."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(25), primary_key=True)
    password: Mapped[str] = mapped_column(Text)
    first_name: Mapped[str] = mapped_column(Text)
    last_name: Mapped[str] = mapped_column(Text)
    email: Mapped[str] = mapped_column(Text)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False)


class Application(Base):
    """A user's application to a job."""

    __tablename__ = "applications"

    username: Mapped[str] = mapped_column(
        ForeignKey("users.username", ondelete="CASCADE"), primary_key=True
    )
    job_id: Mapped[int] = mapped_column(ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True)
