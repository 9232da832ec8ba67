"""inboxtally - live unread thread counts per Gmail label."""

__version__ = "0.1.0"
