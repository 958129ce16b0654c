"""Data models — input records and engine outputs."""
