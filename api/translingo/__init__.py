"""TransLingo translation API."""
