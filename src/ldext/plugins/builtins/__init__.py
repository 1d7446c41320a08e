"""Plugins shipped with ldext and registered unconditionally."""
