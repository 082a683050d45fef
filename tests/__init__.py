"""
Test suite for nn-kernel

Contains:
- tests/unit/          : Unit tests for individual modules
"""
