"""Kernel – error hierarchy and security context shared by every layer."""
