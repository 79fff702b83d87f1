"""Terminal interface for the ThingSpeak sensor dashboard."""
