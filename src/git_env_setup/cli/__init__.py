"""Terminal prompts and status output."""
