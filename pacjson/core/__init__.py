"""Core value model, parser and emitter."""
