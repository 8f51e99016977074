"""Markdown to PDF rendering pipeline internals."""
