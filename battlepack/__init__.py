"""Battle Pack game API: game lifecycle, completion records and rankings."""
