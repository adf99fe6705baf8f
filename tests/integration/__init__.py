# Integration Tests
"""
Integration tests drive the suite through real HTTP calls to an
in-process fake StorySpoil service.

Principle: exercise the same client, setup and scenarios that the live
run uses; only the server is substituted.
"""
