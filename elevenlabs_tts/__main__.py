"""Allow running as `python -m elevenlabs_tts`."""

from .cli import main

if __name__ == "__main__":
    main()
