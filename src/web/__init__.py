"""Web preview of compiled pages."""
