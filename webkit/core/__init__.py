"""Core — models, the scaffolding engine, manifest tracking and producers."""
