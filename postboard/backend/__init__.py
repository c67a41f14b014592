"""Postboard server: RPC procedures, auth actions and the rendered page."""
