"""Circular buffer test suite.

This package contains tests for the circular buffer component:
- L1: Container unit tests (push, pull, get, peek, clear, stats)
- L2: Iteration tests (borrowing, draining, by-value)
- L3: Counter wraparound tests
- L4: Storage backend tests
"""
