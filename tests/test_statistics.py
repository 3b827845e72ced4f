"""统计服务测试"""
from datetime import datetime

import pytest

from expense_tracker.models.filter import TransactionFilter
from expense_tracker.models.transaction import Transaction
from expense_tracker.services.statistics_service import (
    PeriodSummary, StatisticsService, compute_balance, compute_totals
)

from conftest import FIXED_NOW


def tx(amount, is_income, when=FIXED_NOW, category="Other") -> Transaction:
    return Transaction(title="t", amount=amount, date=when, is_income=is_income, category=category)


class TestPureAggregates:

    def test_compute_totals(self):
        summary = compute_totals([tx(100, True), tx(30, False), tx(20, False), tx(5, True)])
        assert summary.income == 105
        assert summary.expense == 50
        assert summary.balance == 55

    def test_empty(self):
        assert compute_totals([]) == PeriodSummary(0.0, 0.0)
        assert compute_balance([]) == 0

    def test_negative_balance(self):
        assert compute_balance([tx(10, True), tx(25, False)]) == -15

    def test_as_tuple(self):
        assert PeriodSummary(1000, 200).as_tuple() == (1000, 200)


class TestMonthRange:

    @pytest.mark.parametrize("now, start, end", [
        (datetime(2024, 2, 10), datetime(2024, 2, 1), datetime(2024, 2, 29, 23, 59, 59, 999000)),
        (datetime(2023, 2, 28), datetime(2023, 2, 1), datetime(2023, 2, 28, 23, 59, 59, 999000)),
        (datetime(2024, 12, 31, 23, 0), datetime(2024, 12, 1), datetime(2024, 12, 31, 23, 59, 59, 999000)),
    ])
    def test_get_month_range(self, now, start, end):
        assert StatisticsService.get_month_range(now) == (start, end)


class TestStatisticsService:

    def test_balance_over_all_records(self, store):
        service = StatisticsService(store)
        store.add_transaction(tx(1000, True, datetime(2023, 6, 1), "Salary"))
        store.add_transaction(tx(200, False, FIXED_NOW, "Food"))
        store.add_transaction(tx(50, False, datetime(2022, 1, 1), "Bills"))
        assert service.get_balance() == 750

    def test_balance_ignores_filtered_view(self, store):
        service = StatisticsService(store)
        store.add_transaction(tx(1000, True, category="Salary"))
        store.add_transaction(tx(200, False, category="Food"))
        assert store.get_transactions(TransactionFilter(category="Food"))
        assert service.get_balance() == 800

    def test_balance_after_deletes(self, store):
        service = StatisticsService(store)
        ids = [
            store.add_transaction(tx(amount, is_income))
            for amount, is_income in [(500, True), (120, False), (80, False), (40, True)]
        ]
        store.delete_transaction(ids[1])
        store.delete_transaction(ids[3])

        live = store.get_all_transactions()
        expected = sum(t.amount for t in live if t.is_income) - sum(t.amount for t in live if not t.is_income)
        assert service.get_balance() == expected == 420

    def test_current_month_summary(self, store):
        service = StatisticsService(store)
        store.add_transaction(tx(1000, True, category="Salary"))
        store.add_transaction(tx(200, False, category="Food"))
        store.add_transaction(tx(999, False, FIXED_NOW.replace(year=2023)))

        month = service.get_current_month_summary()
        assert month.as_tuple() == (1000, 200)
        assert month.balance == 800

    def test_overall_summary_and_count(self, store):
        service = StatisticsService(store)
        store.add_transaction(tx(10, True))
        store.add_transaction(tx(4, False, datetime(2020, 1, 1)))
        overall = service.get_overall_summary()
        assert (overall.income, overall.expense) == (10, 4)
        assert service.get_transaction_count() == 2

    def test_clock_defaults_to_store_clock(self, store):
        assert StatisticsService(store).clock() == FIXED_NOW

    def test_current_month_follows_service_clock(self, store):
        service = StatisticsService(store, clock=lambda: datetime(2024, 5, 10))
        store.add_transaction(tx(1000, True, datetime(2024, 5, 2), "Salary"))
        store.add_transaction(tx(200, False, FIXED_NOW, "Food"))

        assert service.get_current_month_summary().as_tuple() == (1000, 0)
        assert store.get_monthly_totals() == (0, 200)

    def test_current_month_matches_store_totals_with_shared_clock(self, store):
        service = StatisticsService(store)
        store.add_transaction(tx(300, True, datetime(2024, 3, 1)))
        store.add_transaction(tx(45.5, False, datetime(2024, 3, 31, 23, 59, 59, 999000)))
        store.add_transaction(tx(80, False, datetime(2024, 4, 1)))
        assert service.get_current_month_summary().as_tuple() == store.get_monthly_totals() == (300, 45.5)
