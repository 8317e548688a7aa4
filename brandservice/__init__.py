"""
MCP adapter exposing the brand-service REST backend as MCP tools
"""
__version__ = "1.0.0"
