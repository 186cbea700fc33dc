"""
Root pytest configuration for synth-datagen.

Declares the asyncio plugin once for both tests/unit and tests/integration,
so the batched generation and background task tests share one event loop
policy.
"""

pytest_plugins = ("pytest_asyncio",)
