"""AI authoring assistant: text generation, image generation and helpers."""
