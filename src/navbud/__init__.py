"""navbud: route planning with unprotected left turn detection."""

__version__ = "0.1.0"
