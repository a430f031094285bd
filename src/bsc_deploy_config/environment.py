"""Secret loading from process environment and dotenv files."""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import dotenv_values

from .constants import MNEMONIC_ENV
from .paths import resolve_dotenv_path
from .types import Secrets

logger = logging.getLogger(__name__)


def load_secrets(
    environ: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[Union[Path, str]] = None,
) -> Secrets:
    """
    Populate Secrets from the environment, falling back to a dotenv file.

    Values already present in the environment win over the dotenv file.
    Neither os.environ nor the dotenv file is modified.

    Args:
        environ: Environment mapping (defaults to os.environ)
        dotenv_path: Dotenv file to consult (defaults to ./.env)

    Returns:
        Secrets with mnemonic set to None if absent or blank
    """
    if environ is None:
        environ = os.environ

    dotenv_file = resolve_dotenv_path(dotenv_path)
    file_values = dotenv_values(dotenv_file) if dotenv_file.is_file() else {}

    mnemonic = environ.get(MNEMONIC_ENV)
    if not mnemonic or not mnemonic.strip():
        mnemonic = file_values.get(MNEMONIC_ENV)

    if mnemonic is not None:
        # Collapse line breaks and repeated spaces in pasted phrases
        mnemonic = " ".join(mnemonic.split()) or None

    logger.debug(
        "Loaded secrets (%s %s)", MNEMONIC_ENV, "set" if mnemonic else "unset"
    )
    return Secrets(mnemonic=mnemonic)
