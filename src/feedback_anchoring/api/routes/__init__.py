"""Feedback anchoring API routes."""
