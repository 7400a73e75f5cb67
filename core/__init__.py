# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains everything that talks to BrowserStack.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  Every module here is plain
#   async Python over httpx: the remote-call collaborators, the argument
#   and result models, configuration and telemetry.
#
# Collaborators here RAISE on failure.  The tools/ layer is the boundary
# that turns failures into error envelopes for the MCP host.
# =============================================================================
