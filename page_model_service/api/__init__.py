"""Page Model Service API module."""
