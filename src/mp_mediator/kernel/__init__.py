"""Kernel – errors and security primitives shared by every layer."""
