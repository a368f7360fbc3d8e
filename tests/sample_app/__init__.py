"""A small application used by the dispatcher and testing-helper tests."""
