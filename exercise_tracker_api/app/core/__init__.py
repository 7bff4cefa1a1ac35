"""Configuration, storage, logging and date helpers shared by the app."""
