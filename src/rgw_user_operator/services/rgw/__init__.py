"""RGW admin-ops client and records."""
