"""HTTP routes for the TransLingo API."""
