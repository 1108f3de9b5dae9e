"""Shared gateways and output helpers for localci."""
