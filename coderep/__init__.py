"""coderep - spaced-repetition tracker for coding-interview practice."""
