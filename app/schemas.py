from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

LOCATION_MODES = frozenset({"remote", "on-site"})


class JobPosting(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    jd_uid: str | None = Field(None, alias="jdUid")
    company_name: str = Field("", alias="companyName")
    min_exp: int | float | None = Field(None, alias="minExp")
    max_exp: int | float | None = Field(None, alias="maxExp")
    location: str = ""
    tech_stack: str | None = Field(None, alias="techStack")
    job_role: str | None = Field(None, alias="jobRole")
    min_jd_salary: int | float | None = Field(None, alias="minJdSalary")
    max_jd_salary: int | float | None = Field(None, alias="maxJdSalary")
    salary_currency_code: str | None = Field(None, alias="salaryCurrencyCode")
    jd_link: str | None = Field(None, alias="jdLink")
    job_details_from_company: str | None = Field(None, alias="jobDetailsFromCompany")
    logo_url: str | None = Field(None, alias="logoUrl")

    @field_validator("company_name", "location", mode="before")
    @classmethod
    def _none_as_blank(cls, v):
        return "" if v is None else v


class CriteriaSet(BaseModel):
    """A complete filter configuration. Unset fields match everything."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    min_exp: int | float | None = Field(None, alias="minExp")
    company_name: str | None = Field(None, alias="companyName")
    remote: frozenset[str] = frozenset()
    tech_stack: frozenset[str] = Field(frozenset(), alias="techStack")
    job_role: frozenset[str] = Field(frozenset(), alias="jobRole")
    min_jd_salary: int | float | None = Field(None, alias="minJdSalary")

    @field_validator("remote", mode="before")
    @classmethod
    def _norm_modes(cls, v):
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        modes = frozenset(str(m).strip().lower() for m in v)
        unknown = modes - LOCATION_MODES
        if unknown:
            raise ValueError(f"unknown location mode(s): {sorted(unknown)}")
        return modes

    @field_validator("tech_stack", "job_role", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        if v is None:
            return frozenset()
        if isinstance(v, str):
            return frozenset([v])
        return v


class JobOut(JobPosting):
    index: int


class FeedViewOut(BaseModel):
    jobs: list[JobOut] = []
    loading: bool
    loaded: int
    matched: int
    empty: bool
    error: str | None = None
    criteria: CriteriaSet


class LoadMoreOut(BaseModel):
    accepted: bool
    loading: bool
    offset: int
