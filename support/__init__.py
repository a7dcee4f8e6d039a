"""Support widget integration."""
