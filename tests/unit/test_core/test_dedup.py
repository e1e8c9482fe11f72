#!/usr/bin/env python3
"""Tests for transaction fingerprinting and duplicate filtering."""

import pytest

from fireplan.core.dedup import filter_duplicates, transaction_fingerprint
from tests.fixtures.synthetic_data import make_transaction


class TestTransactionFingerprint:
    @pytest.mark.unit
    def test_stable_for_equal_entries(self):
        a = make_transaction("2024-03-01", "-40.00", reference="RENT-0324")
        b = make_transaction("2024-03-01", "-40.00", reference="RENT-0324")
        assert transaction_fingerprint(a) == transaction_fingerprint(b)
        assert len(transaction_fingerprint(a)) == 64

    @pytest.mark.unit
    def test_differs_by_identifying_fields(self):
        base = make_transaction("2024-03-01", "-40.00")
        assert transaction_fingerprint(base) != transaction_fingerprint(make_transaction("2024-03-02", "-40.00"))
        assert transaction_fingerprint(base) != transaction_fingerprint(make_transaction("2024-03-01", "-40.01"))
        assert transaction_fingerprint(base) != transaction_fingerprint(
            make_transaction("2024-03-01", "-40.00", statement_id="STMT-OTHER")
        )

    @pytest.mark.unit
    def test_ignores_owning_account(self):
        a = make_transaction("2024-03-01", "-40.00", account_iban="DE89370400440532013000")
        b = make_transaction("2024-03-01", "-40.00", account_iban="DE44500105175407324931")
        assert transaction_fingerprint(a) == transaction_fingerprint(b)


class TestFilterDuplicates:
    @pytest.mark.unit
    def test_skips_known_hashes(self):
        known = make_transaction("2024-03-01", "-40.00")
        new = make_transaction("2024-03-02", "-12.00")

        result = filter_duplicates([known, new], {transaction_fingerprint(known)})

        assert result.unique == [new]
        assert result.duplicates == [known]
        assert result.unique_hashes == [transaction_fingerprint(new)]
        assert result.duplicate_count == 1

    @pytest.mark.unit
    def test_repeats_within_batch_keep_first(self):
        tx = make_transaction("2024-03-01", "-40.00")
        result = filter_duplicates([tx, tx], [])

        assert len(result.unique) == 1
        assert result.duplicate_count == 1
