"""MediGrid symptom-to-condition matching engine."""

__version__ = "1.0.0"
