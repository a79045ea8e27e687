"""Validation of JSON data against JSON Schema draft 4 schemas, with optional Swagger 2.0 rules."""

__version__ = "0.1.0"