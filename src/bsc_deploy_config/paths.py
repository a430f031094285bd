"""Path management utilities for bsc-deploy-config library."""

from pathlib import Path
from typing import Optional, Union


def get_default_dotenv_path() -> Path:
    """
    Get default dotenv file location.

    Returns:
        Path to ./.env
    """
    return Path.cwd() / ".env"


def resolve_config_path(config_path: Union[Path, str]) -> Path:
    """
    Normalize a user-supplied configuration file path.

    Args:
        config_path: Relative or absolute path to a JSON configuration file

    Returns:
        Absolute path
    """
    return Path(config_path).expanduser().absolute()


def resolve_dotenv_path(dotenv_path: Optional[Union[Path, str]] = None) -> Path:
    """
    Get dotenv file path.

    Args:
        dotenv_path: Custom dotenv file (defaults to ./.env)

    Returns:
        Absolute path to the dotenv file
    """
    if dotenv_path is None:
        return get_default_dotenv_path()
    return Path(dotenv_path).expanduser().absolute()
