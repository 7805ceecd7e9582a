"""Business services composed from repositories."""
