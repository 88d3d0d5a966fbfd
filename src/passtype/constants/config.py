"""Configuration defaults and filenames."""

from __future__ import annotations

from passtype.types.common import JsonObject

CONFIG_DIRNAME: str = "passtype"
CONFIG_FILENAME: str = "config.yaml"
CONFIG_HOME_ENV: str = "XDG_CONFIG_HOME"
CONFIG_HOME_FALLBACK: str = "~/.config"

VALID_LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_CONFIG: JsonObject = {
    "store": {
        "root": "${PASSWORD_STORE_DIR:-~/.password-store}",
        "suffix": ".gpg",
        "reveal_command": ["pass", "show"],
    },
    "cache": {
        "path": "${XDG_CACHE_HOME:-~/.cache}/passtype/cache.json.gpg",
        "recipient": "${PASSTYPE_GPG_KEY}",
        "workers": 1,
        "prune_orphans": False,
    },
    "gpg": {
        "binary": "gpg",
    },
    "keys": {
        "password": "pass",
        "username": "user",
        "otp_secret": "otp_secret",
        "tan": "tan",
        "window": "window",
        "autotype": "autotype",
    },
    "autotype": {},
    "keybindings": {
        "autotype_1": "Alt+1",
        "autotype_2": "Alt+2",
        "autotype_3": "Alt+3",
        "copy_password": "Alt+c",
        "tan": "Alt+t",
        "copy_otp": "Alt+o",
    },
    "clipboard": {
        "clear_after": 45,
        "detach": True,
        "pid_file": "${XDG_RUNTIME_DIR:-/tmp}/passtype-clipboard.pid",
    },
    "picker": {
        "command": ["rofi", "-dmenu", "-i"],
        "prompt": "passtype",
    },
    "automation": {
        "type_delay_ms": 12,
    },
    "logging": {
        "level": "WARNING",
    },
}

ALLOWED_TOP_LEVEL_KEYS: frozenset[str] = frozenset(DEFAULT_CONFIG)

SCAFFOLD_HEADER: str = (
    "# passtype configuration\n"
    "#\n"
    "# Strings support ${VAR} and ${VAR:-default} environment interpolation.\n"
    "# Set cache.recipient to the gpg key that encrypts the metadata cache.\n"
    "# Entry-independent autotype defaults go under 'autotype', e.g.\n"
    "#   autotype:\n"
    "#     autotype: user :tab pass :enter\n"
    "\n"
)
