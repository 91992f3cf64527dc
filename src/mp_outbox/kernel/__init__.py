"""Kernel – pure data, ports, errors and time primitives (no I/O)."""
