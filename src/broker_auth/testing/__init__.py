"""Testing helpers – in-memory doubles for the store ports."""
