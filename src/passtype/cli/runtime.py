"""Wire collaborators and the cache store from a resolved config."""

from __future__ import annotations

from dataclasses import dataclass

from passtype.config.model import PasstypeConfig
from passtype.integrations.base import Automation, Cipher, ClearScheduler, Clipboard, CredentialStore, Notifier, Picker
from passtype.integrations.clipboard import DetachedClearScheduler, PyperclipClipboard, TimerClearScheduler
from passtype.integrations.gpg import GpgCipher
from passtype.integrations.notify import NotifySendNotifier
from passtype.integrations.pass_store import PassStore
from passtype.integrations.rofi import RofiPicker
from passtype.integrations.xdotool import XdotoolAutomation
from passtype.store import CacheStore, ChangeDetector, MetadataLoader


@dataclass
class Runtime:
    """The external collaborators one invocation works with."""

    store: CredentialStore
    cipher: Cipher
    automation: Automation
    clipboard: Clipboard
    clear_scheduler: ClearScheduler
    notifier: Notifier
    picker: Picker


def build_runtime(config: PasstypeConfig) -> Runtime:
    """Build the default subprocess/pyperclip-backed collaborators."""
    clipboard = PyperclipClipboard()
    clear_scheduler: ClearScheduler
    if config.clipboard.detach:
        clear_scheduler = DetachedClearScheduler(config.clipboard.pid_file)
    else:
        clear_scheduler = TimerClearScheduler(clipboard)
    return Runtime(
        store=PassStore(config.store.root, config.store.suffix, config.store.reveal_command),
        cipher=GpgCipher(config.gpg_binary),
        automation=XdotoolAutomation(type_delay_ms=config.type_delay_ms),
        clipboard=clipboard,
        clear_scheduler=clear_scheduler,
        notifier=NotifySendNotifier(),
        picker=RofiPicker(config.picker.command),
    )


def build_cache(config: PasstypeConfig, runtime: Runtime) -> CacheStore:
    return CacheStore(
        path=config.cache.path,
        cipher=runtime.cipher,
        recipient=config.cache.recipient,
        detector=ChangeDetector(runtime.store),
        loader=MetadataLoader(runtime.store, config.keys),
        workers=config.cache.workers,
        prune_orphans=config.cache.prune_orphans,
    )
