from .app import cmd_dashboard

__all__ = ["cmd_dashboard"]
