"""Subcommands of the postman-mcp CLI."""
