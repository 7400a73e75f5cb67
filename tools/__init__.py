# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the MCP tool adapters and their registration.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between the MCP host and core/.
#     - automate.py / testmanagement.py hold the ADAPTERS: each one calls
#       exactly one core/ collaborator and converts any failure into an
#       error envelope.  Adapters never raise.
#     - mcp_server.py is the REGISTRATION SHIM: it binds each adapter to a
#       tool name, a description and an input schema on a FastMCP server.
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build HTTP requests (that's in core/)
#   - They do NOT retry, cache or orchestrate anything
# =============================================================================
