"""
Preset configurations for common simulation scenarios.

These mirror the worked examples for each model family: a four-category
GPCM, a five-point PCM rating scale, and dichotomous Rasch, 2PL and 3PL
tests.
"""

from pathlib import Path

from irt_simulation.synthetic_data.config import GenerationConfig
from irt_simulation.synthetic_data.parameters import load_config

PARAMS_DIR = Path(__file__).parent / "params"


def get_available_presets() -> list[str]:
    return sorted(x.stem for x in PARAMS_DIR.glob("*.yaml"))


def get_preset(name: str) -> GenerationConfig:
    """Get a preset configuration by name."""
    config_path = PARAMS_DIR / f"{name}.yaml"
    if not config_path.exists():
        available_presets = get_available_presets()
        raise ValueError(
            f"Unknown preset: {name}. Available presets: {available_presets}"
        )
    return load_config(config_path)
