"""Version information for elevenlabs-tts."""

__version__ = "0.1.0"
