"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of ledgerlens.

The tests are organized by invariant:
1. test_formatting.py - Amount rendering: bounds, monotonicity, idempotence
2. test_summaries.py - Summaries are total, ordered and filter non-generic

These tests use hypothesis for property-based testing.
"""
