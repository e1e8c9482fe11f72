"""
Test Fixtures and Utilities

Shared test data and builders for the test suite.

This module provides:
- Synthetic CAMT.053 documents
- Builders for accounts, transactions and goals

All test data is synthetic and does not contain real financial information.
"""
