"""Employee CRUD web service."""
