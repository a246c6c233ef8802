"""
Test suite for the life expectancy engine.

- Unit tests (services)
- Integration tests (session pipeline)
- API endpoint tests
- Property-based tests
"""
