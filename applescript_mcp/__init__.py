"""AppleScript MCP: macOS automation tools over the Model Context Protocol."""
