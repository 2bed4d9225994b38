"""
Test suite for debtsolver

Contains:
- tests/unit/          : Unit tests for individual modules
"""
