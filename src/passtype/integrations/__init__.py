"""External collaborators: credential store, cipher, automation, clipboard, notifications, picker."""

from .base import (
    Automation,
    Cipher,
    ClearScheduler,
    Clipboard,
    CredentialStore,
    Notifier,
    Picker,
    Selection,
    Window,
)

__all__ = [
    "Automation",
    "Cipher",
    "ClearScheduler",
    "Clipboard",
    "CredentialStore",
    "Notifier",
    "Picker",
    "Selection",
    "Window",
]
