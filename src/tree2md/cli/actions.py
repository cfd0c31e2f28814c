"""Argparse actions taking their defaults from ``TREE2MD_*`` environment variables."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os

from tree2md.constants import ENV_VAR_PREFIX

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "1", "yes", "on")


def env_key_for(dest: str) -> str:
    """Environment variable consulted for an argument, e.g. ``TREE2MD_BULLET_MARKER``."""
    return f"{ENV_VAR_PREFIX}{dest.upper().replace('-', '_')}"


def _dest_from_options(option_strings, kwargs) -> str | None:
    dest = kwargs.get("dest")
    if dest is not None:
        return dest
    for option in option_strings:
        if option.startswith("--"):
            return option[2:].replace("-", "_")
    return None


class EnvironmentAwareAction(argparse.Action):
    """Store action whose default comes from the environment when set.

    Values are converted with the argument's ``type``; a value that fails to
    convert is logged and ignored.
    """

    def __init__(self, option_strings, **kwargs):
        dest = _dest_from_options(option_strings, kwargs)
        if dest:
            env_key = env_key_for(dest)
            env_value = os.environ.get(env_key)
            if env_value is not None:
                converter = kwargs.get("type")
                try:
                    kwargs["default"] = converter(env_value) if converter is not None else env_value
                except (ValueError, TypeError, argparse.ArgumentTypeError) as e:
                    logger.warning("Invalid environment variable %s=%s: %s", env_key, env_value, e)
        super().__init__(option_strings, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, values)


class EnvironmentAwareBooleanAction(argparse._StoreTrueAction):
    """``store_true`` action whose default comes from the environment when set."""

    def __init__(self, option_strings, **kwargs):
        dest = _dest_from_options(option_strings, kwargs)
        if dest:
            env_value = os.environ.get(env_key_for(dest))
            if env_value is not None:
                kwargs["default"] = env_value.strip().lower() in TRUE_VALUES
        super().__init__(option_strings, **kwargs)


def create_env_aware_argument(parser, *args, **kwargs):
    """Add an argument with environment variable support chosen by its action."""
    action = kwargs.get("action", "store")
    if action == "store_true":
        kwargs["action"] = EnvironmentAwareBooleanAction
    elif action in ("store", None):
        kwargs["action"] = EnvironmentAwareAction
    return parser.add_argument(*args, **kwargs)
