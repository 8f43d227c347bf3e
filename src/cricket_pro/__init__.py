"""Cricket Pro - cricket scorekeeping backend and snapshot sync client."""
