"""Route modules package."""
