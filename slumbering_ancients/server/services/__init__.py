"""Request-scoped services behind the assistant, map analysis and wiki sync."""
