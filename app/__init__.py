"""URL shortener with self-expiring links."""
