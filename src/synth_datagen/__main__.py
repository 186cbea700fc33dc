"""Allow ``python -m synth_datagen``."""

from .cli import entrypoint

if __name__ == "__main__":
    entrypoint()
