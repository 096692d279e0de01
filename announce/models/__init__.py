"""Data models: portable message, service wire formats, requests and outcomes."""
