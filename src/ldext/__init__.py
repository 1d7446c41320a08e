"""ldext — typed extensions over linked-data documents."""

__version__ = "0.1.0"
