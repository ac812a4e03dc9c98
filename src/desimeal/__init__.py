"""Indian meal planning against diet, budget and cooking-skill constraints."""

__version__ = "0.1.0"
