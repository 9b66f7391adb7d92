"""Proxmox Virtual Environment VM configuration types, request bodies and read-only data sources."""

__version__ = "0.8.0"