"""Domain services: clearance comparison, credential resolution, access decisions."""
