"""Fuzzy name search over a parsed dataset."""
