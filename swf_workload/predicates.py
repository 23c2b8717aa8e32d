"""Acceptance predicates deciding which candidate jobs are kept.

A predicate is a plain function from a candidate ``JobSpec`` to ``bool``.
"""

from collections.abc import Callable

from swf_workload.models import JobSpec

Predicate = Callable[[JobSpec], bool]


def accept_all(job: JobSpec) -> bool:
    """Accept every job."""
    return True


def max_processors(limit: int) -> Predicate:
    """Accept jobs needing at most ``limit`` processing elements."""

    def predicate(job: JobSpec) -> bool:
        return job.processor_count <= limit

    return predicate


def min_runtime(seconds: int) -> Predicate:
    """Accept jobs running for at least ``seconds``."""

    def predicate(job: JobSpec) -> bool:
        return job.runtime_seconds >= seconds

    return predicate


def submitted_within(start: int, end: int | None = None) -> Predicate:
    """Accept jobs submitted in ``[start, end)``; ``end=None`` leaves it open."""

    def predicate(job: JobSpec) -> bool:
        if job.submit_delay_seconds < start:
            return False
        return end is None or job.submit_delay_seconds < end

    return predicate


def from_users(*user_ids: int) -> Predicate:
    """Accept jobs submitted by one of ``user_ids``."""
    allowed = frozenset(user_ids)

    def predicate(job: JobSpec) -> bool:
        return job.user_id in allowed

    return predicate


def all_of(*predicates: Predicate) -> Predicate:
    """Accept jobs accepted by every predicate (all jobs when none given)."""

    def predicate(job: JobSpec) -> bool:
        return all(p(job) for p in predicates)

    return predicate
