"""Service layer for the TransLingo API."""
