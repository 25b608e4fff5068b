"""Business services of the recipe lifecycle."""
