"""Desktop entry resolution engine."""
