"""Domain apps of the screen marketplace."""
