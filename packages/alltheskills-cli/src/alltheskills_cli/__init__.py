"""AllTheSkills CLI: list, inspect and install skills from the terminal."""
