"""Fold an imported dataset into the live one."""

from dataclasses import dataclass, replace

from loguru import logger

from advocate_diary.models.case import Case, Dataset


@dataclass(frozen=True)
class MergeStats:
    """Summary of a merge."""

    cases_added: int
    cases_skipped: int
    advocate_name_changed: bool


def merge_with_stats(current: Dataset, incoming: Dataset) -> tuple[Dataset, MergeStats]:
    """Merge incoming into current and report what happened.

    Cases are keyed by id. Existing cases always win: an incoming case whose id is
    already present is dropped whole, with no field-level merge. New cases are
    appended in incoming order. A non-empty incoming advocate name replaces the
    current one. last_backup_date is never touched.
    """
    merged: list[Case] = list(current.cases)
    seen = {c.id for c in merged}
    added = 0
    skipped = 0
    for case in incoming.cases:
        if case.id in seen:
            skipped += 1
            continue
        merged.append(case)
        seen.add(case.id)
        added += 1

    name = incoming.advocate_name or current.advocate_name
    result = replace(current, cases=tuple(merged), advocate_name=name)
    stats = MergeStats(
        cases_added=added,
        cases_skipped=skipped,
        advocate_name_changed=name != current.advocate_name,
    )
    logger.debug("Merge: {} added, {} skipped", added, skipped)
    return result, stats


def merge(current: Dataset, incoming: Dataset) -> Dataset:
    """Return the id-keyed, local-wins union of current and incoming."""
    return merge_with_stats(current, incoming)[0]
