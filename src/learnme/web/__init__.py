"""Web API for LearnMe."""
