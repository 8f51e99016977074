"""Adapters bridging the pipeline with third-party engines."""
