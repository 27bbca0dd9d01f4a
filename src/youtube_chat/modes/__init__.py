"""Session modes that do not need raw keystrokes."""
