"""Reporter configuration sourced from the process environment."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from notion_core.constants import EnvVars


def is_env_set(name: str, environ: Mapping[str, str] | None = None) -> bool:
    """Check whether an environment variable is present.

    Parameters
    ----------
    name : str
        Variable name
    environ : Mapping[str, str], optional
        Environment to consult, defaults to ``os.environ``

    Returns
    -------
    bool
        True if the variable is set to any value, including the empty string
    """
    env = os.environ if environ is None else environ
    return name in env


@dataclass(frozen=True)
class ReporterConfig:
    """Flags controlling how much detail the error reporter exposes.

    Attributes
    ----------
    dev_mode : bool
        Show internal details instead of the end-user message
    backtrace_enabled : bool
        Allow backtraces to be printed in developer mode
    """

    dev_mode: bool = False
    backtrace_enabled: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ReporterConfig":
        """Build a config from environment variables.

        Parameters
        ----------
        environ : Mapping[str, str], optional
            Environment to consult, defaults to ``os.environ``

        Returns
        -------
        ReporterConfig
            Config reflecting ``NOTION_DEV`` and ``NOTION_BACKTRACE``
        """
        return cls(
            dev_mode=is_env_set(EnvVars.DEV, environ),
            backtrace_enabled=is_env_set(EnvVars.BACKTRACE, environ),
        )
