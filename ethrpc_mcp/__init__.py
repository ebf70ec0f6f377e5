"""
ethrpc-mcp - Ethereum JSON-RPC tools over the Model Context Protocol
"""

__version__ = "1.0.0"
__logo__ = "⛓"
