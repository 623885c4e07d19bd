"""Read-only discovery of a pot host: system configuration, bridges, pots and their run state."""
