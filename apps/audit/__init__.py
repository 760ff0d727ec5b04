"""Append-only audit trail of privileged operations."""
