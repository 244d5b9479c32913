"""Practice quiz backend: tests, graded attempts, and statistics over a key-value store."""
