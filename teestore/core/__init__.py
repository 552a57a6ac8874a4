"""Core building blocks shared by the server: logging, monitoring, errors, security and persistence."""
