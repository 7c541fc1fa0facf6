"""Bus trip and passenger roster API."""
