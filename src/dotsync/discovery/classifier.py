"""Static classification of dotfiles into configuration kinds.

Classification is purely name based and runs in a fixed order:

1. Exact base-name match against ``CONFIG_TYPE_MAPPING``
   (``.bashrc`` is bash, ``config`` is ssh).
2. Extension match against the same table (``work.bashrc`` is bash).
3. Fallback: any base name containing one of ``SUPPORTED_EXTENSIONS``
   is a ``custom`` config (``app.conf``, ``.xinitrc.conf``).
4. Anything else is not a configuration file and is skipped.

Name matches always win over extension matches because many dotfiles
have no extension at all.
"""

from __future__ import annotations

import os

from dotsync.discovery.models import ConfigType

CONFIG_TYPE_MAPPING: dict[str, ConfigType] = {
    ".bashrc": ConfigType.BASH,
    ".bash_profile": ConfigType.BASH,
    ".bash_aliases": ConfigType.BASH,
    ".zshrc": ConfigType.ZSH,
    ".zsh_profile": ConfigType.ZSH,
    ".vimrc": ConfigType.VIM,
    ".nvimrc": ConfigType.VIM,
    ".gitconfig": ConfigType.GIT,
    ".gitignore_global": ConfigType.GIT,
    "config": ConfigType.SSH,
    "known_hosts": ConfigType.SSH,
    ".profile": ConfigType.SYSTEM,
    ".inputrc": ConfigType.SYSTEM,
    ".tmux.conf": ConfigType.SYSTEM,
    ".screenrc": ConfigType.SYSTEM,
}

SUPPORTED_EXTENSIONS: tuple[str, ...] = (
    ".rc",
    ".conf",
    ".config",
    ".profile",
    ".bashrc",
    ".zshrc",
    ".vimrc",
    ".nvimrc",
    ".gitconfig",
    ".gitignore",
    ".ssh",
    ".tmux",
    ".screen",
)


def classify_name(file_name: str, extension: str = "") -> ConfigType | None:
    """Classify a base name and extension.

    Args:
        file_name: Base name of the file (no directory part).
        extension: Extension including the leading dot, or "".

    Returns:
        The configuration kind, or None when the file is not a config.
    """
    if file_name in CONFIG_TYPE_MAPPING:
        return CONFIG_TYPE_MAPPING[file_name]
    if extension and extension in CONFIG_TYPE_MAPPING:
        return CONFIG_TYPE_MAPPING[extension]
    if any(ext in file_name for ext in SUPPORTED_EXTENSIONS):
        return ConfigType.CUSTOM
    return None


def classify_path(path: str | os.PathLike[str]) -> ConfigType | None:
    """Classify a file by its path."""
    file_name = os.path.basename(os.fspath(path))
    _, extension = os.path.splitext(file_name)
    return classify_name(file_name, extension)
