"""Time adapters (unit tables and clocks) and locale spellings."""
