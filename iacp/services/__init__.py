"""Business logic for users, claim configuration, tokens and the authorization graph."""
