"""Adapters connecting the core to transports and the process."""
