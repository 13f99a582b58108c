"""MCP server for navigating the heading tree of Jupyter notebooks."""

__version__ = "0.1.0"
