"""Descriptions, entries and calculators that map host parameters to IFC properties."""
