"""
Configuration model for glint.

The CLI constructs a Config instance and passes it down into the prompt
rendering logic so behavior can be adjusted without relying on global
state. Environment variables are only consulted here.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

FORMAT_ENV_VAR = "GLINT_FORMAT"

# https://no-color.org/
NO_COLOR_ENV_VAR = "NO_COLOR"

DEFAULT_FORMAT = r"#g;*(\b)\<#y(\B)\(\+\-)>\[#g(\M\A\R\D) #r(\m\d) #k(\a) #m(\u)]\{#c(\h)}"


@dataclass
class Config:
    """
    Top-level configuration for a glint run.
    """

    format: str = DEFAULT_FORMAT
    else_format: Optional[str] = None
    path: Optional[str] = None
    color: bool = True
    bash_escapes: bool = False
    silent: bool = False
    verbosity: int = 0


def format_from_env(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Return the format configured in the environment, or the default.
    """

    env = os.environ if environ is None else environ
    return env.get(FORMAT_ENV_VAR) or DEFAULT_FORMAT


def color_from_env(environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    Return False when the NO_COLOR convention asks for plain output.
    """

    env = os.environ if environ is None else environ
    return not env.get(NO_COLOR_ENV_VAR)
