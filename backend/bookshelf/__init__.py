"""Bookshelf: book records API with JWT authentication."""
