# StorySpoil API Suite Tests
"""
Tests for the StorySpoil API suite.

Unit and integration tests run offline against tests.fake_service;
tests/e2e talks to the real deployment and is opt-in.
"""
