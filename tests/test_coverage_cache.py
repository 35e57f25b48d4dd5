from __future__ import annotations

from datetime import date

import pytest

from src.hr_analytics.hr_analytics.core.exceptions import DataLoadError, ValidationError
from src.hr_analytics.hr_analytics.coverage.service import CoverageService


def test_rebuild_replaces_only_the_range(coverage_repo):
    coverage_repo.add_leave("A", date(2024, 1, 30), date(2024, 2, 2))
    coverage_repo.add_regularization("B", date(2024, 2, 5))
    svc = CoverageService(coverage_repo)
    svc.rebuild_cache(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))

    rows = svc.rebuild_cache(start_date=date(2024, 2, 1), end_date=date(2024, 2, 29))

    assert rows == 3
    assert sorted(c.coverage_date for c in coverage_repo.cache) == [
        date(2024, 1, 30),
        date(2024, 1, 31),
        date(2024, 2, 1),
        date(2024, 2, 2),
        date(2024, 2, 5),
    ]


def test_rebuild_is_repeatable(coverage_repo):
    coverage_repo.add_leave("A", date(2024, 1, 1), date(2024, 1, 3))
    svc = CoverageService(coverage_repo)

    svc.rebuild_cache(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))
    svc.rebuild_cache(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))

    assert len(coverage_repo.cache) == 3
    assert {c.source_table for c in coverage_repo.cache} == {"leave_records"}


def test_rebuild_rejects_inverted_range(coverage_repo):
    with pytest.raises(ValidationError):
        CoverageService(coverage_repo).rebuild_cache(start_date=date(2024, 2, 1), end_date=date(2024, 1, 1))


def test_load_failure_is_wrapped(coverage_repo):
    coverage_repo.fail_load = True

    with pytest.raises(DataLoadError):
        CoverageService(coverage_repo).load(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))
