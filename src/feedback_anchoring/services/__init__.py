"""Feedback anchoring services."""
