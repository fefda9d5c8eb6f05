"""Tests for calendar totals and source distribution."""

from caffeine_tracker.domain.intake import MANUAL_ENTRY_KEY
from caffeine_tracker.domain.stats import SortBy
from caffeine_tracker.services import calendar
from caffeine_tracker.services.aggregation import (
    MANUAL_ENTRY_NAME,
    UNKNOWN_DRINK_NAME,
    daily_totals_for_month,
    daily_totals_for_week,
    hourly_totals_for_day,
    monthly_totals_for_year,
    source_distribution,
    total_in_range,
)
from tests.conftest import NOW, at, make_record


def test_week_totals_are_monday_first(utc) -> None:
    records = [
        make_record(50, at(2024, 1, 8, 9)),
        make_record(30, at(2024, 1, 10, 15)),
    ]

    buckets = daily_totals_for_week(records, NOW, utc)

    assert [bucket.value for bucket in buckets] == [50, 0, 30, 0, 0, 0, 0]
    assert [bucket.label for bucket in buckets][0] == "Mon"
    week_total = total_in_range(
        records, calendar.start_of_week(NOW, utc), calendar.end_of_week(NOW, utc)
    )
    assert week_total == 80


def test_total_in_range_includes_both_edges() -> None:
    records = [make_record(10, 100), make_record(20, 200), make_record(40, 201)]

    assert total_in_range(records, 100, 200) == 30
    assert total_in_range(records, 300, 400) == 0
    assert total_in_range([], 0, 1) == 0


def test_month_buckets_cover_every_day(utc) -> None:
    anchor = at(2024, 2, 15)
    records = [
        make_record(100, at(2024, 2, 1)),
        make_record(60, at(2024, 2, 29, 23, 59)),
        make_record(500, at(2024, 3, 1)),
    ]

    buckets = daily_totals_for_month(records, anchor, utc)

    assert len(buckets) == 29
    assert buckets[0].value == 100
    assert buckets[-1].value == 60
    assert buckets[-1].label == "29"
    month_total = total_in_range(
        records,
        calendar.start_of_month(anchor, utc),
        calendar.end_of_month(anchor, utc),
    )
    assert sum(bucket.value for bucket in buckets) == month_total


def test_year_buckets_sum_to_year_total(utc) -> None:
    records = [
        make_record(100, at(2024, 1, 5)),
        make_record(40, at(2024, 7, 20)),
        make_record(25, at(2024, 12, 31, 23)),
        make_record(999, at(2023, 12, 31, 23)),
    ]

    buckets = monthly_totals_for_year(records, NOW, utc)

    assert [bucket.label for bucket in buckets][:2] == ["Jan", "Feb"]
    assert len(buckets) == 12
    assert buckets[6].value == 40
    assert sum(bucket.value for bucket in buckets) == 165


def test_hourly_totals_use_local_hours(berlin) -> None:
    records = [
        make_record(80, at(2024, 1, 10, 7, 30)),
        make_record(20, at(2024, 1, 10, 7, 45)),
        make_record(50, at(2024, 1, 9, 7)),
    ]

    hourly = hourly_totals_for_day(records, NOW, berlin)

    assert len(hourly) == 24
    assert hourly[8] == 100
    assert sum(hourly) == 100


def test_distribution_percentages_sum_to_hundred_for_equal_groups() -> None:
    records = [
        make_record(10, NOW, custom_name="Tea"),
        make_record(10, NOW, custom_name="Cola"),
        make_record(10, NOW, custom_name="Mate"),
    ]

    shares = source_distribution(records, SortBy.COUNT)

    assert sorted(share.percentage for share in shares) == [33, 33, 34]
    assert sum(share.percentage for share in shares) == 100


def test_distribution_groups_by_drink_and_ranks_by_amount() -> None:
    records = [
        make_record(95, NOW, drink_id="espresso"),
        make_record(95, NOW, drink_id="espresso"),
        make_record(40, NOW, drink_id="cola", name="Cola can"),
        make_record(30, NOW, custom_name="Green tea"),
    ]

    shares = source_distribution(records, SortBy.AMOUNT, {"espresso": "Espresso"})

    assert [share.key for share in shares] == ["espresso", "cola", "Green tea"]
    assert shares[0].display_name == "Espresso"
    assert shares[0].amount == 190
    assert shares[0].count == 2
    assert shares[1].display_name == "Cola can"
    assert [share.percentage for share in shares] == [73, 15, 12]


def test_distribution_names_manual_and_unknown_sources() -> None:
    records = [
        make_record(50, NOW),
        make_record(20, NOW, drink_id="retired-drink"),
    ]

    shares = source_distribution(records, SortBy.AMOUNT)

    assert shares[0].key == MANUAL_ENTRY_KEY
    assert shares[0].display_name == MANUAL_ENTRY_NAME
    assert shares[1].display_name == UNKNOWN_DRINK_NAME


def test_distribution_keeps_drink_and_label_with_same_text_apart() -> None:
    records = [
        make_record(60, NOW, drink_id="latte"),
        make_record(40, NOW, custom_name="latte"),
    ]

    shares = source_distribution(records, SortBy.AMOUNT)

    assert len(shares) == 2
    assert [share.amount for share in shares] == [60, 40]


def test_distribution_skips_zero_amounts_and_handles_empty_input() -> None:
    assert source_distribution([], SortBy.AMOUNT) == []
    assert source_distribution([make_record(0, NOW)], SortBy.COUNT) == []

    shares = source_distribution(
        [make_record(0, NOW, custom_name="Decaf"), make_record(10, NOW)],
        SortBy.COUNT,
    )
    assert [share.percentage for share in shares] == [100]


def test_distribution_percentages_always_sum_to_hundred() -> None:
    amounts = [1, 1, 1, 1, 1, 1, 94]
    records = [
        make_record(amount, NOW, custom_name=f"source-{index}")
        for index, amount in enumerate(amounts)
    ]

    for sort_by in SortBy:
        shares = source_distribution(records, sort_by)
        assert sum(share.percentage for share in shares) == 100
        assert all(share.percentage >= 0 for share in shares)
