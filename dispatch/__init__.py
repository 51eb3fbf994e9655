"""Dispatch: voice-matched LinkedIn drafting and cascades."""
