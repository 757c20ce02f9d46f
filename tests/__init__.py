"""Test suite for the bdd-assembly package.

This package contains unit and integration tests validating support
code building, step matching, test plan assembly and serialization.
"""
