"""Front-end adapters for interactive editing."""
