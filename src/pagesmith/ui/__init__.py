"""User interfaces for pagesmith."""
