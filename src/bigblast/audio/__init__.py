"""
Big Blast audio: pygame mixer sound set with generated chiptune effects.
"""

from .engine import AudioEngine, AudioSink, NullAudio

__all__ = ["AudioEngine", "AudioSink", "NullAudio"]
