"""CLI command modules for create-laju-app."""

from .create import register_create_command

__all__ = ["register_create_command"]
