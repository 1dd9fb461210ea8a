"""
Test suite for the conference UI regression harness.

This package contains:
- unit/: Browser-free tests of the harness with mocked Playwright objects
- e2e/: Multi-participant browser scenarios against a live deployment
"""
