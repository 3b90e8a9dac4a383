"""
Command-line interface for the Postman MCP server.

- ``serve`` / ``serve-http``: run the stdio or HTTP transport
- ``tools``: print the tool catalogue
- ``search`` / ``structure`` / ``show`` / ``generate``: inspect an exported
  collection file offline
"""
