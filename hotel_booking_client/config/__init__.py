"""Configuration for the hotel booking client."""
