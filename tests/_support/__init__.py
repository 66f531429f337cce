"""
Test support utilities for composekit tests.

Sample domain types and recording handlers that don't fit as pytest
fixtures but are shared across test modules.
"""
