"""Configuration, logging and monitoring shared by the server, client and CLI."""
