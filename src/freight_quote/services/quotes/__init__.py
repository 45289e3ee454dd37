"""Quote orchestration."""
