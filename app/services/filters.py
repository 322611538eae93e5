from __future__ import annotations

from typing import Iterable, Sequence

from ..schemas import CriteriaSet, JobPosting


def matches_experience(job: JobPosting, min_exp: float | None) -> bool:
    if min_exp is None or job.min_exp is None:
        return True
    return job.min_exp >= min_exp


def matches_company(job: JobPosting, company_name: str | None) -> bool:
    if not company_name:
        return True
    return company_name.lower() in job.company_name.lower()


def matches_location(job: JobPosting, modes: Iterable[str]) -> bool:
    modes = set(modes)
    if not modes or {"remote", "on-site"} <= modes:
        return True
    is_remote = "remote" in job.location.lower()
    if "remote" in modes:
        return is_remote
    if "on-site" in modes:
        return not is_remote
    return True


def matches_tags(tag: str | None, allowed: Iterable[str]) -> bool:
    allowed = set(allowed)
    return not allowed or tag in allowed


def matches_salary(job: JobPosting, min_salary: float | None) -> bool:
    if min_salary is None or job.min_jd_salary is None:
        return True
    return job.min_jd_salary >= min_salary


def job_matches(job: JobPosting, criteria: CriteriaSet) -> bool:
    return (
        matches_experience(job, criteria.min_exp)
        and matches_company(job, criteria.company_name)
        and matches_location(job, criteria.remote)
        and matches_tags(job.tech_stack, criteria.tech_stack)
        and matches_tags(job.job_role, criteria.job_role)
        and matches_salary(job, criteria.min_jd_salary)
    )


def filter_jobs(jobs: Sequence[JobPosting], criteria: CriteriaSet) -> list[JobPosting]:
    """
    Keep the postings that satisfy every criterion, in their original order.
    An unset criterion is treated as "no filter" on that dimension.
    """
    return [job for job in jobs if job_matches(job, criteria)]
