"""Courier: chat orchestration with declarative external tool invocation."""

__version__ = "0.1.0"
