"""Infrastructure: database wiring and SQLModel-backed stores."""
