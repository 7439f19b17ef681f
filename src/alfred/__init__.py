"""Alfred: a butler-style task tracker driven by short text commands."""
