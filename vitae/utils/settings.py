"""
Settings and path resolution.

Paths come from the environment (.env via python-dotenv) with package-relative
defaults; tunable constants come from an OmegaConf YAML file that is loaded
once and made read-only.
"""

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

load_dotenv()

PACKAGE_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "config" / "settings.yaml"
DEFAULT_SKINS_PATH = PACKAGE_ROOT / "contexts" / "rendering" / "skins"

CONFIG_PATH = Path(os.getenv("VITAE_CONFIG_PATH", str(DEFAULT_CONFIG_PATH)))
SKINS_PATH = Path(os.getenv("VITAE_SKINS_PATH", str(DEFAULT_SKINS_PATH)))
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


def load_settings(config_path: Path = None) -> DictConfig:
    """
    Load a settings file as a read-only OmegaConf config.

    Args:
        config_path: Optional path to a settings YAML (defaults to VITAE_CONFIG_PATH)

    Returns:
        Read-only DictConfig

    Raises:
        FileNotFoundError: If the settings file doesn't exist
    """
    if config_path is None:
        config_path = CONFIG_PATH

    if not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {config_path}")

    config = OmegaConf.load(config_path)
    OmegaConf.set_readonly(config, True)
    return config


@lru_cache(maxsize=None)
def get_settings() -> DictConfig:
    """Process-wide settings, loaded on first use."""
    return load_settings()
