"""
Test suite for fpd

Contains:
- tests/unit/          : Unit tests for individual modules
"""
