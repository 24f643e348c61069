"""Chatterbox: a Discord assistant with per-server flags and history-aware prompts."""
