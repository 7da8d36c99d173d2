"""Balance and per-date rollups."""

from decimal import Decimal

import pendulum
import pytest

from hourbank.service.aggregate import rollup_by_date, total
from hourbank.service.ledger import Ledger

JAN_1 = pendulum.date(2024, 1, 1)
JAN_2 = pendulum.date(2024, 1, 2)
JAN_3 = pendulum.date(2024, 1, 3)


@pytest.fixture
def scenario_ledger(ledger: Ledger) -> Ledger:
    ledger.add(JAN_1, Decimal("3.5"))
    ledger.add(JAN_1, Decimal("1.0"))
    ledger.add(JAN_2, Decimal("-2.0"))
    return ledger


def test_total_of_nothing_is_exact_zero():
    result = total([])

    assert isinstance(result, Decimal)
    assert result == Decimal("0")


def test_total_has_no_floating_point_drift():
    assert total([Decimal("0.1")] * 10) == Decimal("1.0")


def test_total_keeps_digits_past_the_default_precision():
    amounts = [Decimal("1.00000000000000000000000000001"), Decimal("1")]

    assert total(amounts) == Decimal("2.00000000000000000000000000001")


def test_rollup_sums_amounts_at_the_bounds_exactly():
    rows = [
        (JAN_1, Decimal("999999999.9999999999")),
        (JAN_1, Decimal("0.0000000001")),
    ] * 2

    assert rollup_by_date(rows, 1) == [
        {"date": JAN_1, "amount": Decimal("2000000000.0000000000")}
    ]


def test_rollup_merges_contiguous_dates():
    rows = [
        (JAN_3, Decimal("1")),
        (JAN_2, Decimal("2")),
        (JAN_2, Decimal("0.5")),
        (JAN_1, Decimal("-1")),
    ]

    assert rollup_by_date(rows, 10) == [
        {"date": JAN_3, "amount": Decimal("1")},
        {"date": JAN_2, "amount": Decimal("2.5")},
        {"date": JAN_1, "amount": Decimal("-1")},
    ]


def test_rollup_limit_counts_dates_not_entries():
    rows = [
        (JAN_2, Decimal("1")),
        (JAN_2, Decimal("1")),
        (JAN_1, Decimal("5")),
    ]

    assert rollup_by_date(rows, 1) == [{"date": JAN_2, "amount": Decimal("2")}]
    assert rollup_by_date(rows, 0) == []


def test_rollup_rejects_unsorted_input():
    with pytest.raises(ValueError):
        rollup_by_date([(JAN_1, Decimal("1")), (JAN_2, Decimal("1"))], 5)


def test_scenario_balance(scenario_ledger: Ledger):
    assert scenario_ledger.balance() == Decimal("2.5")


def test_scenario_rollups(scenario_ledger: Ledger):
    assert scenario_ledger.list_recent_by_date(1) == [
        {"date": JAN_2, "amount": Decimal("-2.0")}
    ]
    assert scenario_ledger.list_recent_by_date(2) == [
        {"date": JAN_2, "amount": Decimal("-2.0")},
        {"date": JAN_1, "amount": Decimal("4.5")},
    ]


def test_scenario_delete_by_date_then_undo(scenario_ledger: Ledger):
    scenario_ledger.delete({"ids": None, "dates": {JAN_1}})
    assert scenario_ledger.balance() == Decimal("-2.0")

    scenario_ledger.undo(1)
    assert scenario_ledger.balance() == Decimal("2.5")


def test_rollup_buckets_are_unique_and_descending(ledger: Ledger):
    dates = [JAN_2, JAN_1, JAN_3, JAN_2, JAN_1, JAN_3, JAN_1]
    for index, date in enumerate(dates):
        ledger.add(date, Decimal(index + 1))

    buckets = ledger.list_recent_by_date(10)
    bucket_dates = [bucket["date"] for bucket in buckets]

    assert bucket_dates == [JAN_3, JAN_2, JAN_1]
    assert sum(bucket["amount"] for bucket in buckets) == ledger.balance()


def test_balance_ignores_deleted_entries(ledger: Ledger):
    ledger.add(JAN_1, Decimal("8"))
    removed = ledger.add(JAN_2, Decimal("100"))
    ledger.delete({"ids": {removed}, "dates": None})

    assert ledger.balance() == Decimal("8")
    assert ledger.list_recent_by_date(10) == [{"date": JAN_1, "amount": Decimal("8")}]


def test_balance_is_exact_sum_of_many_adds(ledger: Ledger):
    amounts = [Decimal("0.1"), Decimal("0.2"), Decimal("-0.3"), Decimal("7.75")] * 5
    for amount in amounts:
        ledger.add(JAN_1, amount)

    assert ledger.balance() == sum(amounts, Decimal(0))
    assert ledger.balance() == Decimal("38.75")
