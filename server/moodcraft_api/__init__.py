"""MoodCraft API - HTTP surface over the mood engine."""
