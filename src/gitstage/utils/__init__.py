"""Internal utilities for gitstage."""
