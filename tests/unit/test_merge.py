"""Tests for the id-keyed, local-wins merge."""

from dataclasses import replace

from advocate_diary.core.merge import merge, merge_with_stats
from advocate_diary.models.case import Dataset, Hearing
from tests.unit.fakes import make_case


def test_overlapping_id_keeps_local_case() -> None:
    current = Dataset(cases=(make_case("A", title="Old"),))
    incoming = Dataset(cases=(make_case("A", title="New"), make_case("B", title="Other")))

    result = merge(current, incoming)

    assert [c.id for c in result.cases] == ["A", "B"]
    assert result.cases[0].title == "Old"
    assert result.cases[1] == incoming.cases[1]


def test_merge_is_idempotent(sample_dataset: Dataset) -> None:
    incoming = Dataset(
        cases=(make_case("case-a", title="Changed"), make_case("new-1"), make_case("new-2")),
        advocate_name="Imported Name",
    )

    once = merge(sample_dataset, incoming)
    twice = merge(once, incoming)

    assert twice == once


def test_merge_never_alters_existing_cases(sample_dataset: Dataset) -> None:
    altered = tuple(
        replace(c, title="X", history=(Hearing(id="z", date="2020-01-01"),))
        for c in sample_dataset.cases
    )
    incoming = Dataset(cases=altered)

    result = merge(sample_dataset, incoming)

    assert result.cases == sample_dataset.cases


def test_merge_appends_new_cases_in_incoming_order() -> None:
    current = Dataset(cases=(make_case("A"),))
    incoming = Dataset(cases=(make_case("C"), make_case("A"), make_case("B")))

    result = merge(current, incoming)

    assert [c.id for c in result.cases] == ["A", "C", "B"]


def test_duplicate_ids_within_import_are_added_once() -> None:
    incoming = Dataset(cases=(make_case("D", title="first"), make_case("D", title="second")))

    result, stats = merge_with_stats(Dataset(), incoming)

    assert [c.title for c in result.cases] == ["first"]
    assert stats.cases_added == 1
    assert stats.cases_skipped == 1


def test_non_empty_incoming_name_overwrites() -> None:
    current = Dataset(advocate_name="Counsel")

    result, stats = merge_with_stats(current, Dataset(advocate_name="R. Menon"))

    assert result.advocate_name == "R. Menon"
    assert stats.advocate_name_changed is True


def test_empty_incoming_name_keeps_current() -> None:
    current = Dataset(advocate_name="R. Menon")

    result = merge(current, Dataset(advocate_name=""))

    assert result.advocate_name == "R. Menon"


def test_last_backup_date_is_untouched() -> None:
    current = Dataset(last_backup_date="2024-01-01T00:00:00.000Z")
    incoming = Dataset(last_backup_date="2030-01-01T00:00:00.000Z")

    assert merge(current, incoming).last_backup_date == "2024-01-01T00:00:00.000Z"
    assert merge(Dataset(), incoming).last_backup_date is None


def test_cases_without_id_do_not_crash_merge() -> None:
    incoming = Dataset(cases=(make_case(""), make_case("")))

    result = merge(Dataset(cases=(make_case("A"),)), incoming)

    assert [c.id for c in result.cases] == ["A", ""]
