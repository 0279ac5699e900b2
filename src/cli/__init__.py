"""Command-line surface: click commands, terminal formatting, structured log sink."""
