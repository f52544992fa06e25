"""Global hotkey listener producing switcher events."""

import threading
from queue import Empty, Queue
from typing import Optional, Set
from pynput import keyboard

_MODIFIER_KEYS = {
    'alt': {keyboard.Key.alt, keyboard.Key.alt_l, keyboard.Key.alt_r},
    'cmd': {keyboard.Key.cmd, keyboard.Key.cmd_l, keyboard.Key.cmd_r},
    'ctrl': {keyboard.Key.ctrl, keyboard.Key.ctrl_l, keyboard.Key.ctrl_r},
}
_MODIFIER_ALIASES = {'option': 'alt', 'control': 'ctrl'}
_SHIFT_KEYS = {keyboard.Key.shift, keyboard.Key.shift_l, keyboard.Key.shift_r}


class HotkeyListener:
    """Global hotkey listener that works from any application.

    Holding the modifier opens a session and releasing it closes the
    session. While held:
    - Tab: next app
    - Shift+Tab: previous app
    - Ctrl+Space: next category (Space alone when the modifier is Ctrl)
    """

    def __init__(self, modifier: Optional[str] = None):
        """
        Initialize hotkey listener.

        Args:
            modifier: Session modifier ('alt'/'option', 'cmd', 'ctrl'). Default: 'alt'
        """
        name = (modifier or 'alt').lower()
        self.modifier = _MODIFIER_ALIASES.get(name, name)
        if self.modifier not in _MODIFIER_KEYS:
            raise ValueError(f"Unsupported modifier '{modifier}'")

        self.event_queue: Queue = Queue()
        self.listener = None
        self.running = False
        self.is_held = False
        self.pressed: Set[str] = set()

    def _classify_key(self, key) -> Optional[str]:
        if key in _SHIFT_KEYS:
            return 'shift'
        for name, keys in _MODIFIER_KEYS.items():
            if key in keys:
                return name
        return None

    def _on_press(self, key):
        """Track modifiers and translate key presses into events."""
        name = self._classify_key(key)
        if name is not None:
            self.pressed.add(name)
            if name == self.modifier and not self.is_held:
                self.is_held = True
                self.event_queue.put('request_show')
            return

        if not self.is_held:
            return

        if key == keyboard.Key.tab:
            if 'shift' in self.pressed:
                self.event_queue.put('previous_app')
            else:
                self.event_queue.put('next_app')
        elif key == keyboard.Key.space and 'ctrl' in self.pressed:
            self.event_queue.put('next_category')

    def _on_release(self, key):
        """Close the session when the modifier is released."""
        name = self._classify_key(key)
        if name is None:
            return
        self.pressed.discard(name)
        if name == self.modifier and self.is_held:
            self.is_held = False
            self.event_queue.put('request_hide')

    def start(self):
        """Start listening for hotkeys in a background thread."""
        if self.running:
            return

        self.running = True
        try:
            self.listener = keyboard.Listener(on_press=self._on_press, on_release=self._on_release)
        except Exception as e:
            self.running = False
            raise RuntimeError(
                f"Failed to register hotkeys for '{self.modifier}': {e}\n"
                "On macOS, you may need to grant Accessibility permissions:\n"
                "System Settings > Privacy & Security > Accessibility > Add Terminal"
            ) from e

        def run_listener():
            try:
                self.listener.start()
                self.listener.join()
            except KeyError as e:
                # pynput raises KeyError('AXIsProcessTrusted') without Accessibility permissions
                print(f"Warning: Hotkey listener has limited functionality: {e}")
            except Exception as e:
                print(f"Error in hotkey listener: {e}")

        thread = threading.Thread(target=run_listener, daemon=True)
        thread.start()

        print(f"⌨️  Hold {self.modifier} and press Tab to cycle apps "
              f"(Shift+Tab back, Ctrl+Space next category)\n")

    def stop(self):
        """Stop listening for hotkeys."""
        if self.listener:
            self.listener.stop()
        self.running = False

    def next_event(self, timeout: Optional[float] = None) -> Optional[str]:
        """
        Wait for the next event.

        Args:
            timeout: Maximum seconds to wait (None = wait forever)

        Returns:
            Event name, or None on timeout
        """
        try:
            return self.event_queue.get(timeout=timeout)
        except Empty:
            return None
