"""Core services: security, accounts, logging, errors."""
