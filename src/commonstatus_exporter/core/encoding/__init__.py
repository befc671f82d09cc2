"""Encoders for metric records."""
